"""Point light source."""

from dataclasses import dataclass, field

from raytracer.core.tuples import Color, Tuple4, point, white


@dataclass
class PointLight:
    """An idealized point emitter with no geometry.

    Attributes:
        position: World-space position.
        intensity: Emitted color and brightness.
    """

    position: Tuple4 = field(default_factory=lambda: point(0.0, 0.0, 0.0))
    intensity: Color = field(default_factory=white)
