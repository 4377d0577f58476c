"""Noise image rendering pipeline.

Builds a gradient lattice sized to the requested width, samples it on a
regular grid and converts the result to an 8-bit greyscale image.
"""

import numpy as np
from PIL import Image
from dataclasses import dataclass

from .noise import SCALE, GradientLattice, to_greyscale

# Rows of pixels sampled per vectorised pass
ROW_CHUNK = 256


@dataclass
class NoiseConfig:
    """Configuration for noise image generation."""

    # Pixels per lattice cell
    scale: float = SCALE


def point_interval(scale):
    """Sampling step: the double just below 1 / scale.

    Stepping by exactly 1 / scale would land on the last cell boundary
    and sample one extra row and column.
    """
    return np.nextafter(1 / scale, 0)


def sample_points(width, side, scale=SCALE):
    """Lattice coordinates sampled along one axis.

    Starts one step in and advances by repeated addition, ``width`` times.
    At power-of-two scales every point already lies below ``side - 1``;
    other scales can drift onto the last cell boundary, so points are
    capped just below it.

    Args:
        width: Number of pixels along the axis.
        side: Lattice side length as computed by GradientLattice.
        scale: Pixels per lattice cell.

    Returns:
        float64 array of length ``width``.
    """
    step = float(point_interval(scale))

    points = np.empty(width, dtype=np.float64)
    x = step
    for i in range(width):
        points[i] = x
        x += step

    return np.minimum(points, np.nextafter(side - 1, 0))


def render_pixels(lattice, chunk_rows=ROW_CHUNK):
    """Sample ``lattice`` into a row-major (width, width) uint8 array.

    Rows are evaluated ``chunk_rows`` at a time to bound the size of the
    float64 temporaries.
    """
    points = sample_points(lattice.width, lattice.side, lattice.scale)
    pixels = np.empty((lattice.width, lattice.width), dtype=np.uint8)
    cols = points[np.newaxis, :]
    for start in range(0, lattice.width, chunk_rows):
        rows = points[start:start + chunk_rows, np.newaxis]
        pixels[start:start + len(rows)] = to_greyscale(lattice.sample(rows, cols))
    return pixels


def render(width, seed=None, config=None, on_seed=None):
    """Render a square greyscale noise image.

    Args:
        width: Image width and height in pixels.
        seed: Random seed for reproducible generation.
        config: NoiseConfig instance (defaults used if None).
        on_seed: Called with the generated seed when ``seed`` is None.

    Returns:
        PIL Image in L mode, with the effective seed in ``info["seed"]``.
    """
    if config is None:
        config = NoiseConfig()

    lattice = GradientLattice(width, seed=seed, scale=config.scale,
                              on_seed=on_seed)
    image = Image.fromarray(render_pixels(lattice))
    image.info["seed"] = lattice.seed
    return image
