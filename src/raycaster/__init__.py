"""Python implementation of the parallel sphere ray caster.

This package renders scenes of spheres lit by point lights, with support for:
- Exact ray-sphere intersection with inner/outer hit detection
- Phong shading (ambient, diffuse, specular) with binary shadow rays
- Recursive fork/join row scheduling over a shared thread pool
- PNG export of the rendered frame buffers

Subpackages:
    core: Vectors, rays, shading, scheduling, and the frame producer
    geometry: Primitive interface and the sphere primitive
    scene: Immutable scenes, the scene manager, and the closest-hit resolver
    camera: Viewport basis and primary ray generation
    preview: Frame buffer conversion and image export
"""

__version__ = "0.1.0"
