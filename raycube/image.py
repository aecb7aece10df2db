"""In-memory 32-bit images used for textures and frame buffers."""

from __future__ import annotations

_MASK = 0xFFFFFFFF


class Image:
    """A width x height grid of 32-bit 0xAARRGGBB pixels, initially zero.

    Pixels are addressed as ``image[x, y]`` with the origin at the top left.
    """

    __slots__ = ("width", "height", "_pixels")

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = [0] * (width * height)

    def _index(self, key):
        x, y = key
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def __getitem__(self, key):
        return self._pixels[self._index(key)]

    def __setitem__(self, key, value):
        self._pixels[self._index(key)] = value & _MASK

    def fill(self, color):
        """Set every pixel to ``color``."""
        self._pixels = [color & _MASK] * (self.width * self.height)

    def to_rgb_bytes(self):
        """Return the pixels as packed 8-bit RGB triples, row by row."""
        return bytes(
            channel
            for pixel in self._pixels
            for channel in ((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF)
        )

    def __repr__(self):
        return f"Image({self.width}, {self.height})"