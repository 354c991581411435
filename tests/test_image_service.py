"""Unit tests for cat image classifiers."""

import unittest
import tempfile
import shutil
import os
import sys

import numpy as np
from PIL import Image

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.services.image_service import (
    CascadeImageService, FakeImageService, create_image_service, load_image
)
from catpoint_security.services.interfaces import ImageServiceInterface
from catpoint_security.services.error_handler import ImageLoadError
from catpoint_security.models.security import CatDetectionResult


class FixedImageService(ImageServiceInterface):
    """Classifier with a preset result."""

    def __init__(self, result: CatDetectionResult):
        self.result = result

    def detect(self, image):
        return self.result


class TestImageServiceInterface(unittest.TestCase):
    """Test cases for the threshold comparison in classify()."""

    def test_classify_compares_threshold(self):
        """Test that confidence below the threshold is not a cat."""
        service = FixedImageService(CatDetectionResult(contains_cat=True, confidence=0.7))

        self.assertTrue(service.classify(None, 0.5))
        self.assertTrue(service.classify(None, 0.7))
        self.assertFalse(service.classify(None, 0.8))

    def test_classify_without_cat(self):
        """Test that no cat is never reported as a cat."""
        service = FixedImageService(CatDetectionResult(contains_cat=False, confidence=0.0))

        self.assertFalse(service.classify(None, 0.0))


class TestFakeImageService(unittest.TestCase):
    """Test cases for FakeImageService."""

    def test_seeded_results_repeat(self):
        """Test that equal seeds give equal result sequences."""
        image = np.zeros((10, 10, 3), dtype=np.uint8)
        first = FakeImageService(seed=42)
        second = FakeImageService(seed=42)

        self.assertEqual([first.detect(image) for _ in range(20)],
                         [second.detect(image) for _ in range(20)])

    def test_results_vary(self):
        """Test that both outcomes occur."""
        service = FakeImageService(seed=7)
        outcomes = {service.detect(None).contains_cat for _ in range(100)}

        self.assertEqual(outcomes, {True, False})

    def test_confidence_range(self):
        """Test confidence bounds for both outcomes."""
        service = FakeImageService(seed=3)
        for _ in range(50):
            result = service.detect(None)
            if result.contains_cat:
                self.assertGreaterEqual(result.confidence, 0.5)
                self.assertLessEqual(result.confidence, 1.0)
            else:
                self.assertEqual(result.confidence, 0.0)


class TestCascadeImageService(unittest.TestCase):
    """Test cases for CascadeImageService."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = CascadeImageService()

    def test_blank_image_has_no_cat(self):
        """Test that a uniform image contains no cat."""
        image = np.full((240, 320, 3), 128, dtype=np.uint8)

        result = self.service.detect(image)

        self.assertFalse(result.contains_cat)
        self.assertFalse(self.service.classify(image, 0.5))

    def test_grayscale_image_accepted(self):
        """Test detection on a single-channel image."""
        image = np.zeros((120, 160), dtype=np.uint8)

        self.assertFalse(self.service.detect(image).contains_cat)

    def test_empty_image(self):
        """Test detection on missing or empty input."""
        self.assertFalse(self.service.detect(None).contains_cat)
        self.assertFalse(self.service.detect(np.zeros((0, 0, 3), dtype=np.uint8)).contains_cat)

    def test_box_confidence(self):
        """Test that centered, larger boxes score higher."""
        shape = (480, 640)
        centered = self.service._box_confidence((270, 190, 100, 100), shape)
        corner = self.service._box_confidence((0, 0, 100, 100), shape)
        large = self.service._box_confidence((170, 90, 300, 300), shape)

        self.assertGreater(centered, corner)
        self.assertGreater(large, centered)
        self.assertLessEqual(large, 1.0)
        self.assertGreaterEqual(corner, 0.6)

    def test_missing_cascade_raises(self):
        """Test that an unusable cascade path is an error."""
        with self.assertRaises(ImageLoadError):
            CascadeImageService(cascade_path="no_such_cascade.xml")


class TestImageHelpers(unittest.TestCase):
    """Test cases for image loading and service creation."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_image(self):
        """Test reading an image file into an RGB array."""
        path = os.path.join(self.test_dir, "snapshot.png")
        Image.new("L", (32, 24), color=200).save(path)

        image = load_image(path)

        self.assertEqual(image.shape, (24, 32, 3))
        self.assertEqual(int(image[0, 0, 0]), 200)

    def test_load_image_errors(self):
        """Test missing and invalid image files."""
        with self.assertRaises(ImageLoadError):
            load_image(os.path.join(self.test_dir, "missing.png"))

        bad_path = os.path.join(self.test_dir, "bad.png")
        with open(bad_path, 'w') as f:
            f.write("not an image")
        with self.assertRaises(ImageLoadError):
            load_image(bad_path)

    def test_create_image_service(self):
        """Test classifier selection by name."""
        self.assertIsInstance(create_image_service("fake"), FakeImageService)
        self.assertIsInstance(create_image_service("cascade"), CascadeImageService)
        with self.assertRaises(ValueError):
            create_image_service("cloud")


if __name__ == '__main__':
    unittest.main()
