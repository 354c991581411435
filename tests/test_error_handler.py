"""Unit tests for error handling."""

import unittest
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.services.error_handler import (
    ComponentStatus, ErrorHandler, ErrorSeverity, ImageLoadError, SecurityError,
    SensorNotFoundError, with_error_handling
)


class TestErrorHandler(unittest.TestCase):
    """Test cases for ErrorHandler."""

    def setUp(self):
        """Set up test fixtures."""
        self.handler = ErrorHandler()
        self.handler.register_component("image_service")

    def test_register_component(self):
        """Test component registration."""
        self.assertEqual(self.handler.component_error_counts["image_service"], 0)
        self.assertEqual(self.handler.get_component_health()["image_service"], ComponentStatus.HEALTHY)

    def test_handle_error_updates_status(self):
        """Test error counts and component status by severity."""
        self.handler.handle_error("image_service", ValueError("low"), ErrorSeverity.LOW)
        self.assertEqual(self.handler.component_status["image_service"], ComponentStatus.HEALTHY)

        self.handler.handle_error("image_service", ValueError("high"), ErrorSeverity.HIGH)
        self.assertEqual(self.handler.component_status["image_service"], ComponentStatus.DEGRADED)

        self.handler.handle_error("image_service", ValueError("critical"), ErrorSeverity.CRITICAL)
        self.assertEqual(self.handler.component_status["image_service"], ComponentStatus.FAILED)

        self.assertEqual(self.handler.component_error_counts["image_service"], 3)
        self.assertEqual(len(self.handler.error_records), 3)

    def test_error_records_capped(self):
        """Test that only the newest records are kept."""
        handler = ErrorHandler(max_records=3)
        for i in range(5):
            handler.handle_error("image_service", ValueError(f"error {i}"), ErrorSeverity.LOW)

        self.assertEqual([str(r.error) for r in handler.error_records],
                         ["error 2", "error 3", "error 4"])
        self.assertEqual(handler.component_error_counts["image_service"], 5)
        self.assertEqual(handler.get_error_summary()["total_errors"], 3)

    def test_unregistered_component(self):
        """Test errors from components that never registered."""
        self.handler.handle_error("repository", OSError("disk full"), ErrorSeverity.MEDIUM)

        self.assertEqual(self.handler.component_error_counts["repository"], 1)

    def test_reset_error_counts(self):
        """Test resetting one or all components."""
        self.handler.register_component("repository")
        self.handler.handle_error("image_service", ValueError("x"), ErrorSeverity.HIGH)
        self.handler.handle_error("repository", ValueError("y"), ErrorSeverity.CRITICAL)

        self.handler.reset_error_counts("image_service")
        self.assertEqual(self.handler.component_error_counts["image_service"], 0)
        self.assertEqual(self.handler.component_error_counts["repository"], 1)

        self.handler.reset_error_counts()
        self.assertEqual(self.handler.component_error_counts["repository"], 0)
        self.assertEqual(self.handler.component_status["repository"], ComponentStatus.HEALTHY)

    def test_error_summary(self):
        """Test error summary counts."""
        self.handler.handle_error("image_service", ValueError("a"), ErrorSeverity.LOW)
        self.handler.handle_error("image_service", ValueError("b"), ErrorSeverity.HIGH)

        summary = self.handler.get_error_summary(hours=1)

        self.assertEqual(summary["total_errors"], 2)
        self.assertEqual(summary["component_counts"], {"image_service": 2})
        self.assertEqual(summary["severity_counts"]["low"], 1)
        self.assertEqual(summary["severity_counts"]["high"], 1)
        self.assertEqual(summary["severity_counts"]["critical"], 0)


class TestWithErrorHandling(unittest.TestCase):
    """Test cases for the with_error_handling decorator."""

    def setUp(self):
        """Set up test fixtures."""
        self.handler = ErrorHandler()

    def test_success_passes_through(self):
        """Test that results are returned unchanged."""
        @with_error_handling("component", error_handler=self.handler)
        def succeed():
            return 42

        self.assertEqual(succeed(), 42)
        self.assertEqual(len(self.handler.error_records), 0)

    def test_non_critical_error_returns_none(self):
        """Test that non-critical errors are recorded and swallowed."""
        @with_error_handling("component", ErrorSeverity.MEDIUM, error_handler=self.handler)
        def fail():
            raise RuntimeError("boom")

        self.assertIsNone(fail())
        self.assertEqual(self.handler.component_error_counts["component"], 1)
        self.assertIn("RuntimeError", self.handler.error_records[0].traceback_str)

    def test_critical_error_reraised(self):
        """Test that critical errors propagate after being recorded."""
        @with_error_handling("component", ErrorSeverity.CRITICAL, error_handler=self.handler)
        def fail():
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            fail()
        self.assertEqual(self.handler.component_error_counts["component"], 1)


class TestSecurityErrors(unittest.TestCase):
    """Test cases for domain error types."""

    def test_hierarchy(self):
        """Test that domain errors share a base class."""
        self.assertTrue(issubclass(SensorNotFoundError, SecurityError))
        self.assertTrue(issubclass(ImageLoadError, SecurityError))

    def test_sensor_not_found_message(self):
        """Test the not-found message names the sensor."""
        error = SensorNotFoundError("back door")

        self.assertEqual(str(error), "Sensor not found: back door")
        self.assertEqual(error.sensor_ref, "back door")


if __name__ == '__main__':
    unittest.main()
