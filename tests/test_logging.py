"""Tests for logging helpers"""
import pytest

from storefront.logging import get_logger, sanitize_string_for_logging


@pytest.mark.parametrize("value,expected", [
    (None, "N/A"),
    ("", "N/A"),
    ("/admin/dashboard", "/admin/dashboard"),
    ("/admin\nINFO - forged", "/admin\\nINFO - forged"),
    ("p1\x00", "p1"),
    (42, "42"),
])
def test_sanitize_string_for_logging(value, expected):
    """Test control characters are escaped"""
    assert sanitize_string_for_logging(value) == expected


def test_sanitize_truncates():
    """Test long values are cut"""
    assert sanitize_string_for_logging("x" * 60) == "x" * 50 + "..."


def test_get_logger_is_cached():
    """Test one logger per name"""
    assert get_logger("storefront.test") is get_logger("storefront.test")
