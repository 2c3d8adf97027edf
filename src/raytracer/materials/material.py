"""Phong material and local illumination.

A ``Material`` holds the Phong reflection coefficients plus the reflective,
transparency and refractive-index parameters used by the recursive shading
pipeline. Its surface color comes from a ``Pattern``.

Phong lighting combines three terms:
    - ambient: constant fraction of the surface color
    - diffuse: proportional to the cosine between light and normal
    - specular: highlight from the light reflected toward the eye

A point in shadow only receives the ambient term.

Example:
    >>> from raytracer.materials.material import Material
    >>> from raytracer.materials.patterns import FlatPattern
    >>> glass = Material(pattern=FlatPattern(0.1, 0.1, 0.1), transparency=0.9,
    ...                  reflective=0.9, refractive_index=1.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from raytracer.core.tuples import Color, Tuple4, black, dot, normalize, reflect
from raytracer.materials.patterns import FlatPattern, Pattern

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape
    from raytracer.scene.light import PointLight


@dataclass
class Material:
    """Surface properties of a shape.

    Attributes:
        pattern: The surface color source (defaults to flat white).
        ambient: Ambient reflection coefficient, typically in [0, 1].
        diffuse: Diffuse reflection coefficient, typically in [0, 1].
        specular: Specular reflection coefficient, typically in [0, 1].
        shininess: Specular exponent; larger values give smaller highlights.
        reflective: Fraction of the reflected color added to the surface
            (0 = matte, 1 = mirror).
        transparency: Fraction of the refracted color added to the surface.
        refractive_index: Index of refraction. Common values:
            - Vacuum: 1.0
            - Water: 1.333
            - Glass: 1.5
            - Diamond: 2.417
    """

    pattern: Pattern = field(default_factory=FlatPattern)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0


def lighting(
    material: Material,
    shape: Shape,
    light: PointLight,
    point: Tuple4,
    eyev: Tuple4,
    normalv: Tuple4,
    in_shadow: bool = False,
) -> Color:
    """Compute the Phong color of a surface point lit by a point light.

    Args:
        material: The surface material.
        shape: The shape being lit; used to map ``point`` into pattern space.
        light: The light source.
        point: World-space point being lit.
        eyev: Unit vector toward the eye.
        normalv: Unit surface normal.
        in_shadow: Whether the light is occluded; only ambient light remains.

    Returns:
        The RGB color of the point.
    """
    effective_color = material.pattern.color_at_shape(shape, point) * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    lightv = normalize(light.position - point)
    light_dot_normal = dot(lightv, normalv)

    # Light on the other side of the surface
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_dot_eye = dot(reflect(-lightv, normalv), eyev)
    if reflect_dot_eye <= 0.0:
        specular = black()
    else:
        factor = math.pow(reflect_dot_eye, material.shininess)
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular
