"""Named color table for the plate scene.

Colors are authored as hex strings and stored as RGBA tuples with
components in [0, 1], the same form MuJoCo geoms take.
"""

from __future__ import annotations

from dataclasses import dataclass

Color = tuple[float, float, float, float]


def hex_to_rgba(value: str, alpha: float = 1.0) -> Color:
    """'#A03225' -> (0.627, 0.196, 0.145, 1.0)."""
    digits = value.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
    r, g, b = (int(digits[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return (r, g, b, alpha)


@dataclass(frozen=True)
class ColorPalette:
    """The six colors used by the scene.

    Attributes:
        background: Clear color behind everything
        red, blue, grey, yellow: Plate and scatter-box colors
        line: Vertical support line color
    """

    background: Color
    red: Color
    blue: Color
    grey: Color
    yellow: Color
    line: Color

    def __getitem__(self, name: str) -> Color:
        if name not in COLOR_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    @property
    def box_colors(self) -> tuple[Color, ...]:
        """Colors scatter boxes are sampled from (no background, no line)."""
        return tuple(self[name] for name in BOX_COLOR_NAMES)

    def name_of(self, color: Color) -> str:
        """Reverse lookup. Returns the first matching name."""
        for name in COLOR_NAMES:
            if self[name] == color:
                return name
        raise KeyError(color)


COLOR_NAMES = ("background", "red", "blue", "grey", "yellow", "line")
BOX_COLOR_NAMES = ("red", "blue", "grey", "yellow")

DEFAULT_PALETTE = ColorPalette(
    background=hex_to_rgba("#F1F2ED"),  # warm off-white
    red=hex_to_rgba("#A03225"),
    blue=hex_to_rgba("#486FBE"),
    grey=hex_to_rgba("#D8D6C7"),
    yellow=hex_to_rgba("#EBD42B"),
    line=hex_to_rgba("#606060"),
)
