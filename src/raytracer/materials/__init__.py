"""Materials module: Phong material, lighting and patterns.

Components:
    material: Material coefficients and the Phong lighting function
    patterns: Flat, stripe, ring and test patterns
"""

from .material import Material, lighting
from .patterns import FlatPattern, Pattern, RingPattern, StripePattern, TestPattern

__all__ = [
    "Material",
    "lighting",
    "Pattern",
    "FlatPattern",
    "StripePattern",
    "RingPattern",
    "TestPattern",
]
