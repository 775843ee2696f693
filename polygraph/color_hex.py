"""Conversion between '#rrggbb' / '#rrggbbaa' hex strings and RGBA colors."""

from __future__ import annotations

import re
from dataclasses import dataclass

_HEX_BYTE = re.compile(r"\+?[0-9a-fA-F]+")


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA color."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        """An opaque color."""
        return cls(r, g, b, 255)

    @classmethod
    def from_rgba_premultiplied(cls, r: int, g: int, b: int, a: int) -> Color:
        """A color whose channels are stored exactly as given."""
        return cls(r, g, b, a)


def _hex_byte(text: str) -> int:
    if not _HEX_BYTE.fullmatch(text):
        raise ValueError(f"Error parsing hex: invalid digit in {text!r}")
    value = int(text, 16)
    if value > 255:
        raise ValueError(f"Error parsing hex: {text!r} does not fit in a byte")
    return value


def color_from_hex(hex: str) -> Color:
    """Parse '#RRGGBB' or '#RRGGBBAA' (either letter case) into a Color."""
    if hex.isascii() and hex.startswith("#"):
        if len(hex) == 9:
            return Color.from_rgba_premultiplied(
                _hex_byte(hex[1:3]),
                _hex_byte(hex[3:5]),
                _hex_byte(hex[5:7]),
                _hex_byte(hex[7:9]),
            )
        if len(hex) == 7:
            return Color.from_rgb(
                _hex_byte(hex[1:3]), _hex_byte(hex[3:5]), _hex_byte(hex[5:7])
            )
    raise ValueError(
        f"Error parsing hex: {hex}. Example of valid formats: #FFFFFF or #ffffffff"
    )


def color_to_hex(color: Color) -> str:
    """Lowercase '#rrggbb', with an alpha pair appended only when not opaque."""
    if color.a < 255:
        return f"#{color.r:02x}{color.g:02x}{color.b:02x}{color.a:02x}"
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"