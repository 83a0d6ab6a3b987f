"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules: standard
materials, a unit sphere at the origin, and a recording result observer.
"""

import threading

import numpy as np
import pytest


class RecordingObserver:
    """Result observer that keeps a copy of every delivered frame."""

    def __init__(self):
        self.results = []
        self._lock = threading.Lock()

    def accept_result(self, red, green, blue, request_id):
        with self._lock:
            self.results.append((np.copy(red), np.copy(green), np.copy(blue), request_id))

    @property
    def call_count(self):
        return len(self.results)


@pytest.fixture
def white_material():
    """Fully diffuse and fully specular white material."""
    from src.raycaster.geometry.primitive import Material

    return Material(kd=(1.0, 1.0, 1.0), kr=(1.0, 1.0, 1.0), shininess=10.0)


@pytest.fixture
def matte_red():
    """Red diffuse material without a highlight."""
    from src.raycaster.geometry.primitive import Material

    return Material(kd=(1.0, 0.0, 0.0), kr=(0.0, 0.0, 0.0), shininess=1.0)


@pytest.fixture
def unit_sphere(white_material):
    """Sphere of radius 1 centered at the origin."""
    from src.raycaster.core.vector import Vector3
    from src.raycaster.geometry.sphere import Sphere

    return Sphere(Vector3(0.0, 0.0, 0.0), 1.0, white_material)


@pytest.fixture
def observer():
    """A fresh RecordingObserver."""
    return RecordingObserver()
