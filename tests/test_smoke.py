"""Smoke test to verify the project is set up correctly."""

from sdshell import __doc__


def test_package_is_importable() -> None:
    """Verify that sdshell can be imported."""
    assert __doc__ is not None
