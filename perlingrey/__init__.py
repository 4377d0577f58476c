"""perlingrey - Generate greyscale Perlin noise images."""

from .noise import GradientLattice
from .renderer import render, render_pixels, NoiseConfig

__version__ = "0.1.0"
__all__ = ["generate", "render", "render_pixels", "NoiseConfig",
           "GradientLattice"]


def generate(width, seed=None, on_seed=None, **kwargs):
    """Generate a square greyscale noise image.

    Args:
        width: Image width (and height) in pixels.
        seed: Random seed for reproducible generation. When None a seed
            is drawn from OS entropy and passed to ``on_seed``.
        on_seed: Callback receiving a generated seed before rendering.
        **kwargs: Additional NoiseConfig parameters (scale).

    Returns:
        PIL Image in L mode.
    """
    config = NoiseConfig(**kwargs)
    return render(width, seed=seed, config=config, on_seed=on_seed)
