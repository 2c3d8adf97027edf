"""Unit tests for materials and Phong lighting.

Tests cover:
- Default material coefficients
- Lighting with the eye and light in various positions
- Shadowed surfaces
- Patterned surfaces
"""

import math

import numpy as np
import pytest

from raytracer.core.tuples import color, point, vector
from raytracer.geometry.sphere import Sphere
from raytracer.materials.material import Material, lighting
from raytracer.materials.patterns import FlatPattern, StripePattern
from raytracer.scene.light import PointLight

HALF_SQRT2 = math.sqrt(2.0) / 2.0


@pytest.fixture
def shape(id_allocator):
    return Sphere(id_allocator=id_allocator)


class TestMaterialDefaults:
    """Tests for the default material."""

    def test_defaults(self):
        """Test every default coefficient."""
        m = Material()
        assert isinstance(m.pattern, FlatPattern)
        assert np.array_equal(m.pattern.color, color(1.0, 1.0, 1.0))
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == 1.0

    def test_default_patterns_are_not_shared(self):
        """Test that each material gets its own default pattern."""
        assert Material().pattern is not Material().pattern

    def test_point_light_defaults(self):
        """Test that a point light defaults to white at the origin."""
        light = PointLight()
        assert np.array_equal(light.position, point(0.0, 0.0, 0.0))
        assert np.array_equal(light.intensity, color(1.0, 1.0, 1.0))


class TestLighting:
    """Tests for the Phong lighting function."""

    position = point(0.0, 0.0, 0.0)

    def test_eye_between_light_and_surface(self, shape):
        """Test full diffuse and specular with everything in line."""
        light = PointLight(point(0.0, 0.0, -10.0), color(1.0, 1.0, 1.0))
        result = lighting(Material(), shape, light, self.position, vector(0.0, 0.0, -1.0), vector(0.0, 0.0, -1.0))
        assert np.allclose(result, color(1.9, 1.9, 1.9))

    def test_eye_offset_45_degrees(self, shape):
        """Test that the specular term vanishes off the reflection direction."""
        light = PointLight(point(0.0, 0.0, -10.0), color(1.0, 1.0, 1.0))
        eyev = vector(0.0, HALF_SQRT2, -HALF_SQRT2)
        result = lighting(Material(), shape, light, self.position, eyev, vector(0.0, 0.0, -1.0))
        assert np.allclose(result, color(1.0, 1.0, 1.0))

    def test_light_offset_45_degrees(self, shape):
        """Test the diffuse falloff with the light at 45 degrees."""
        light = PointLight(point(0.0, 10.0, -10.0), color(1.0, 1.0, 1.0))
        result = lighting(Material(), shape, light, self.position, vector(0.0, 0.0, -1.0), vector(0.0, 0.0, -1.0))
        assert np.allclose(result, color(0.7364, 0.7364, 0.7364), atol=1e-4)

    def test_eye_in_reflection_path(self, shape):
        """Test the full specular highlight."""
        light = PointLight(point(0.0, 10.0, -10.0), color(1.0, 1.0, 1.0))
        eyev = vector(0.0, -HALF_SQRT2, -HALF_SQRT2)
        result = lighting(Material(), shape, light, self.position, eyev, vector(0.0, 0.0, -1.0))
        assert np.allclose(result, color(1.6364, 1.6364, 1.6364), atol=1e-4)

    def test_light_behind_surface(self, shape):
        """Test that only ambient light remains when lit from behind."""
        light = PointLight(point(0.0, 0.0, 10.0), color(1.0, 1.0, 1.0))
        result = lighting(Material(), shape, light, self.position, vector(0.0, 0.0, -1.0), vector(0.0, 0.0, -1.0))
        assert np.allclose(result, color(0.1, 0.1, 0.1))

    def test_surface_in_shadow(self, shape):
        """Test that a shadowed surface only receives ambient light."""
        light = PointLight(point(0.0, 0.0, -10.0), color(1.0, 1.0, 1.0))
        result = lighting(
            Material(),
            shape,
            light,
            self.position,
            vector(0.0, 0.0, -1.0),
            vector(0.0, 0.0, -1.0),
            in_shadow=True,
        )
        assert np.allclose(result, color(0.1, 0.1, 0.1))

    def test_light_intensity_tints_result(self, shape):
        """Test that a colored light scales every term."""
        light = PointLight(point(0.0, 0.0, -10.0), color(0.5, 0.0, 1.0))
        result = lighting(Material(), shape, light, self.position, vector(0.0, 0.0, -1.0), vector(0.0, 0.0, -1.0))
        assert np.allclose(result, color(0.95, 0.0, 1.9))

    def test_pattern_applied(self, shape):
        """Test that lighting samples the pattern at the lit point."""
        material = Material(
            pattern=StripePattern(color(1.0, 1.0, 1.0), color(0.0, 0.0, 0.0)),
            ambient=1.0,
            diffuse=0.0,
            specular=0.0,
        )
        light = PointLight(point(0.0, 0.0, -10.0), color(1.0, 1.0, 1.0))
        eyev = vector(0.0, 0.0, -1.0)
        normalv = vector(0.0, 0.0, -1.0)
        c1 = lighting(material, shape, light, point(0.9, 0.0, 0.0), eyev, normalv)
        c2 = lighting(material, shape, light, point(1.1, 0.0, 0.0), eyev, normalv)
        assert np.allclose(c1, color(1.0, 1.0, 1.0))
        assert np.allclose(c2, color(0.0, 0.0, 0.0))

    def test_result_does_not_alias_pattern_color(self, shape):
        """Test that modifying a lighting result leaves the pattern intact."""
        material = Material(pattern=FlatPattern(0.5, 0.5, 0.5))
        light = PointLight(point(0.0, 0.0, 10.0), color(1.0, 1.0, 1.0))
        result = lighting(material, shape, light, self.position, vector(0.0, 0.0, -1.0), vector(0.0, 0.0, -1.0))
        result += 1.0
        assert np.allclose(material.pattern.color, color(0.5, 0.5, 0.5))
