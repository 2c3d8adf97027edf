"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: an isolated shape
id allocator and the two-sphere reference world.
"""

import pytest

from raytracer.geometry.shape import IdAllocator
from raytracer.scene.world import World, default_world


@pytest.fixture
def id_allocator() -> IdAllocator:
    """Fresh id sequence so tests do not depend on global allocation order."""
    return IdAllocator()


@pytest.fixture
def world() -> World:
    """The default two-sphere world."""
    return default_world()

