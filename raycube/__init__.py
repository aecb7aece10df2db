"""A textured raycasting engine: .cub scenes, XPM textures and a pygame game."""

__version__ = "0.1.0"
__all__ = ["__version__"]