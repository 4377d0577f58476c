"""Gradient lattice and Perlin-style noise sampling."""

import math

import numpy as np

SCALE = 16.0

# Greatest double below 128, so that noise == 1 maps to 255 rather than 256.
BEFORE_128 = np.nextafter(128.0, 127.0)

_SIGN_BITS = 32


def resolve_seed(seed=None, on_seed=None):
    """Return the effective 32-bit seed for a run.

    Args:
        seed: Non-negative integer, its decimal string form, or None.
        on_seed: Called with the generated seed when ``seed`` is None,
            before the seed is used, so the run can be reproduced.

    Returns:
        int in [0, 2**32).
    """
    if seed is None:
        seed = int(np.random.SeedSequence().entropy) & 0xFFFFFFFF
        if on_seed is not None:
            on_seed(seed)
        return seed

    if isinstance(seed, str):
        text = seed.strip()
        if not text.isdigit():
            raise ValueError(f"seed must be a non-negative integer, got {seed!r}")
        seed = int(text)
    elif isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise TypeError(f"seed must be an integer, got {type(seed).__name__}")

    seed = int(seed)
    if seed < 0:
        raise ValueError(f"seed must be a non-negative integer, got {seed}")
    return seed % 2**32


def smootherstep(start, end, t):
    """Perlin smootherstep blend: 6t^5 - 15t^4 + 10t^3."""
    return start + t * t * t * (3 * t * (2 * t - 5) + 10) * (end - start)


def noise_2d(gradients, r, c):
    """Sample gradient noise at fractional lattice coordinates.

    Args:
        gradients: Array of shape (n, n, 2) holding unit gradient vectors.
        r: Row coordinate(s), each in [0, n - 1).
        c: Column coordinate(s), broadcastable against ``r``.

    Returns:
        Noise value(s) in [-1, 1] with the broadcast shape of ``r`` and ``c``.
    """
    r = np.asarray(r, dtype=np.float64)
    c = np.asarray(c, dtype=np.float64)

    r_floor = np.floor(r)
    c_floor = np.floor(c)
    r_frac = r - r_floor
    c_frac = c - c_floor

    ri = r_floor.astype(np.intp)
    ci = c_floor.astype(np.intp)

    def dot(dr, dc, g):
        return dr * g[..., 0] + dc * g[..., 1]

    # Distance vectors from each corner to the sample point
    top_left = dot(-r_frac, c_frac, gradients[ri, ci])
    top_right = dot(-r_frac, c_frac - 1, gradients[ri, ci + 1])
    bottom_left = dot(1 - r_frac, c_frac, gradients[ri + 1, ci])
    bottom_right = dot(1 - r_frac, c_frac - 1, gradients[ri + 1, ci + 1])

    top = smootherstep(top_left, top_right, c_frac)
    bottom = smootherstep(bottom_left, bottom_right, c_frac)
    return smootherstep(top, bottom, r_frac)


def to_greyscale(noise):
    """Map noise in [-1, 1] to 8-bit intensities in [0, 255]."""
    level = np.floor((np.asarray(noise, dtype=np.float64) + 1) * BEFORE_128)
    return np.clip(level, 0, 255).astype(np.uint8)


class GradientLattice:
    """Square lattice of seeded unit gradient vectors.

    The lattice covers an image of ``width`` pixels at one lattice cell per
    ``scale`` pixels. It is built once and never modified afterwards.

    Args:
        width: Target image width in pixels (positive integer).
        seed: Seed for the generator; a fresh 32-bit seed is drawn if None.
        scale: Pixels per lattice cell.
        on_seed: Receives a generated seed before construction starts.
    """

    def __init__(self, width, seed=None, scale=SCALE, on_seed=None):
        if isinstance(width, bool) or not isinstance(width, (int, np.integer)):
            raise TypeError(f"width must be an integer, got {type(width).__name__}")
        if width <= 0:
            raise ValueError(f"width must be a positive integer, got {width}")
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")

        self.width = int(width)
        self.scale = float(scale)
        self.side = self.width / self.scale + 1
        self.seed = resolve_seed(seed, on_seed=on_seed)

        rng = np.random.RandomState(self.seed)
        self.gradients = _build_gradients(math.ceil(self.side), rng)
        self.gradients.flags.writeable = False

    @property
    def size(self):
        """Number of lattice points along each axis."""
        return self.gradients.shape[0]

    def sample(self, r, c):
        """Noise value(s) at lattice coordinates (r, c)."""
        return noise_2d(self.gradients, r, c)

    def __repr__(self):
        return (f"GradientLattice(width={self.width}, seed={self.seed}, "
                f"size={self.size})")


def _build_gradients(size, rng):
    """Draw ``size`` x ``size`` unit vectors from ``rng`` in row-major order.

    Cells are drawn in blocks of 32: one 32-bit sign word, then one v1 per
    cell, uniform on [-1, 1). Bit k of the word (least significant first)
    gives the sign of v2 for the k-th cell of the block.
    """
    count = size * size
    gradients = np.empty((count, 2), dtype=np.float64)
    shifts = np.arange(_SIGN_BITS, dtype=np.uint32)

    for start in range(0, count, _SIGN_BITS):
        n = min(_SIGN_BITS, count - start)
        bits = rng.randint(0, 2**32, dtype=np.uint32)
        v1 = rng.uniform(-1.0, 1.0, n)
        sign = np.where((bits >> shifts[:n]) & 1, 1.0, -1.0)
        gradients[start:start + n, 0] = v1
        gradients[start:start + n, 1] = sign * np.sqrt(1 - v1 * v1)

    return gradients.reshape(size, size, 2)
