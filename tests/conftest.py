"""Pytest configuration and fixtures for ppstack tests."""

import pytest

from ppstack.palette import Palette


@pytest.fixture
def marker_palette() -> Palette:
    """Palette whose codes are readable ``<role>`` markers."""
    return Palette(**{role: f"<{role}>" for role in Palette.role_names()})
