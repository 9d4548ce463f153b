"""Taichi implementation of a per-pixel sphere ray-tracing kernel.

For every pixel the kernel builds a pinhole-camera ray, tests it against a
single hard-coded sphere and writes either the surface normal as a color or
a white-to-blue sky gradient. The same kernel runs on a CPU thread pool or a
GPU compute grid.

Subpackages:
    core: Ray type, shading, tile-grid dispatch and the frame renderer
    geometry: Sphere primitive and ray-sphere intersection
    camera: Pinhole camera ray generation
    preview: Surface conversion and PNG export

Modules:
    config: Render configuration, validation and backend initialization
"""

__version__ = "0.1.0"
