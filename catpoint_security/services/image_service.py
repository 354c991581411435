"""Cat image classifiers."""

import logging
import os
import random
from typing import List, Optional, Tuple

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..config.defaults import MODEL_SETTINGS
from ..models.security import CatDetectionResult
from .interfaces import ImageServiceInterface
from .error_handler import ImageLoadError
from ..logging_config import get_logger, log_with_context

logger = get_logger("image_service")


def load_image(image_path: str) -> np.ndarray:
    """Read an image file into an RGB numpy array."""
    try:
        with Image.open(image_path) as image:
            return np.asarray(image.convert("RGB"))
    except (OSError, UnidentifiedImageError) as e:
        raise ImageLoadError(f"Cannot read image {image_path}: {e}") from e


class FakeImageService(ImageServiceInterface):
    """Classifier returning random results, for demos and tests."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def detect(self, image: np.ndarray) -> CatDetectionResult:
        contains_cat = self._random.random() < 0.5
        confidence = self._random.uniform(0.5, 1.0) if contains_cat else 0.0
        return CatDetectionResult(contains_cat=contains_cat, confidence=confidence)


class CascadeImageService(ImageServiceInterface):
    """Cat classifier using an OpenCV Haar cat-face cascade."""

    def __init__(self, cascade_path: Optional[str] = None):
        self.scale_factor = MODEL_SETTINGS["scale_factor"]
        self.min_neighbors = MODEL_SETTINGS["min_neighbors"]
        self.min_detection_size = MODEL_SETTINGS["min_size"]
        self.max_detection_size = MODEL_SETTINGS["max_size"]

        self.cascade = self._load_cascade(cascade_path)

    def _load_cascade(self, cascade_path: Optional[str]) -> "cv2.CascadeClassifier":
        """Load the requested cascade or the first built-in cat cascade."""
        if cascade_path:
            candidates = [cascade_path]
        else:
            candidates = [os.path.join(cv2.data.haarcascades, name)
                          for name in MODEL_SETTINGS["cascade_files"]]

        for path in candidates:
            if not os.path.exists(path):
                logger.debug(f"Cascade file not found: {path}")
                continue
            cascade = cv2.CascadeClassifier(path)
            if not cascade.empty():
                logger.info(f"Loaded Haar cascade: {path}")
                return cascade

        raise ImageLoadError(f"No usable Haar cascade among {candidates}")

    def detect(self, image: np.ndarray) -> CatDetectionResult:
        if image is None or image.size == 0:
            return CatDetectionResult(contains_cat=False)

        gray = self._preprocess(image)
        boxes = self._detect_boxes(gray)
        if not boxes:
            logger.debug("No cat found in image")
            return CatDetectionResult(contains_cat=False)

        confidence = max(self._box_confidence(box, gray.shape) for box in boxes)
        log_with_context(logger, logging.INFO, "Cat found in image",
                         {"candidates": len(boxes), "confidence": f"{confidence:.2f}"})
        return CatDetectionResult(contains_cat=True, confidence=confidence)

    def _preprocess(self, image: np.ndarray) -> np.ndarray:
        """Convert to equalized grayscale for the cascade."""
        if image.ndim == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        else:
            gray = image
        return cv2.equalizeHist(gray.astype(np.uint8))

    def _detect_boxes(self, gray: np.ndarray) -> List[Tuple[int, int, int, int]]:
        detections = self.cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_detection_size,
            maxSize=self.max_detection_size,
            flags=cv2.CASCADE_SCALE_IMAGE
        )
        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]

    def _box_confidence(self, box: Tuple[int, int, int, int],
                        frame_shape: Tuple[int, ...]) -> float:
        """Score a detection: larger boxes nearer the frame center score higher."""
        x, y, w, h = box
        frame_h, frame_w = frame_shape[:2]

        center_x = x + w // 2
        center_y = y + h // 2
        center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
        max_dist = (frame_w ** 2 + frame_h ** 2) ** 0.5
        center_factor = 1.0 - (center_dist / max_dist)

        max_area = self.max_detection_size[0] * self.max_detection_size[1]
        size_factor = min(1.0, (w * h) / max_area)

        confidence = 0.6 + 0.2 * center_factor + 0.2 * size_factor
        return max(0.0, min(1.0, confidence))


def create_image_service(name: str, cascade_path: Optional[str] = None) -> ImageServiceInterface:
    """Build the classifier named in the configuration."""
    if name == "cascade":
        return CascadeImageService(cascade_path)
    if name == "fake":
        return FakeImageService()
    raise ValueError(f"Unknown image service: {name}")
