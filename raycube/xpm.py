"""Reading XPM pixmaps into :class:`~raycube.image.Image` objects."""

from __future__ import annotations

import re
from pathlib import Path

from raycube.colornames import lookup_color
from raycube.image import Image

_TRANSPARENT = 0xFF000000
_MAX_NAME = 63
_WORD_SPLIT = re.compile(r"[ \t]+")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


def split_words(text):
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def find(text, needle):
    """Return the index of the first ``needle`` in ``text``, or -1."""
    if len(needle) > len(text):
        return -1
    return text.find(needle)


def find_outside_quotes(text, needle):
    """Like :func:`find`, but skip matches inside double-quoted strings."""
    in_quotes = False
    for pos, char in enumerate(text):
        if pos + len(needle) > len(text):
            break
        if char == '"':
            in_quotes = not in_quotes
        if not in_quotes and text.startswith(needle, pos):
            return pos
    return -1


def strip_comments(text):
    """Blank out C comments outside quoted strings, keeping the text length."""
    for opener, closer in (("/*", "*/"), ("//", "\n")):
        while (begin := find_outside_quotes(text, opener)) != -1:
            body = begin + len(opener)
            end = find(text[body:], closer)
            stop = len(text) if end == -1 else body + end + len(closer)
            text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def _quoted_strings(text):
    pos = 0
    while True:
        start = find(text[pos:], '"')
        if start == -1:
            return
        start += pos + 1
        end = find(text[start:], '"')
        if end == -1:
            return
        yield text[start:start + end]
        pos = start + end + 1


def _atoi(word):
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def _strtol_hex(text):
    match = _HEX_PREFIX.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def _text_rgb(name, end):
    if name.startswith("#"):
        return _strtol_hex(name[1:])
    if end is not None:
        name = f"{name} {end}"[:_MAX_NAME]
    value = lookup_color(name)
    return 0 if value is None else value


def parse_xpm_lines(lines):
    """Build an image from the strings of an XPM array.

    ``lines`` yields the header, then the colour definitions, then one
    string per pixel row.
    """
    source = iter(lines)

    def next_line():
        try:
            return next(source)
        except StopIteration:
            raise XpmError("XPM data ends too early") from None

    header = split_words(next_line())
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header)!r}")

    colors = {}
    for _ in range(ncolors):
        line = next_line()
        key = line[:cpp]
        words = split_words(line[cpp:])
        try:
            at = words.index("c")
        except ValueError:
            raise XpmError(f"colour definition without 'c': {line!r}") from None
        if at + 1 >= len(words):
            raise XpmError(f"colour definition without a colour: {line!r}")
        end = words[at + 2] if at + 2 < len(words) else None
        rgb = _text_rgb(words[at + 1], end)
        if cpp <= 2:
            colors[key] = rgb
        else:
            colors.setdefault(key, rgb)

    image = Image(width, height)
    for y in range(height):
        line = next_line()
        for x in range(width):
            color = colors.get(line[cpp * x:cpp * (x + 1)], 0)
            image[x, y] = _TRANSPARENT if color == -1 else color
    return image


def parse_xpm_text(text):
    """Build an image from the text of an XPM file."""
    return parse_xpm_lines(_quoted_strings(strip_comments(text)))


def load_xpm(path):
    """Read an XPM file from ``path`` and return its image."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)