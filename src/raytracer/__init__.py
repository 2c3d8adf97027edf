"""CPU Whitted-style ray tracer.

Renders scenes of spheres, planes and groups lit by a point light, with
Phong shading, hard shadows, recursive reflection and refraction (blended
with Schlick's Fresnel approximation), and a row-parallel rendering loop.

Subpackages:
    core: Points/vectors/matrices, rays, intersection state, rendering loop
    geometry: Shape abstraction and primitives (sphere, plane, group)
    materials: Phong material, lighting and procedural patterns
    scene: Point light, world shading pipeline, scene configuration
    camera: Pinhole camera with pixel-to-ray mapping
    preview: PNG export of rendered images
"""

__version__ = "0.1.0"
