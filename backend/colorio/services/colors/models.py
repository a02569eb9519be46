"""
Value types shared by the color engine.

All records are frozen dataclasses: an extraction builds fresh values per call
and nothing here is mutated after construction.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(float(value) + 0.5))


def clamp_channel(value: float) -> int:
    """Round and clamp a single channel value into [0, 255]."""
    return max(0, min(255, round_half_up(value)))


@dataclass(frozen=True)
class RGB:
    """An sRGB color with integer channels clamped to [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in ("r", "g", "b"):
            object.__setattr__(self, channel, clamp_channel(getattr(self, channel)))

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "RGB":
        r, g, b = values
        return cls(r, g, b)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_dict(self) -> Dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}


@dataclass(frozen=True)
class HSL:
    """
    Hue in degrees [0, 360), saturation and lightness in percent [0, 100].

    Hue wraps around the wheel; saturation and lightness are clamped.
    """
    h: float
    s: float
    l: float

    def __post_init__(self):
        object.__setattr__(self, "h", self.h % 360)
        object.__setattr__(self, "s", max(0, min(100, self.s)))
        object.__setattr__(self, "l", max(0, min(100, self.l)))

    def to_dict(self) -> Dict[str, float]:
        return {"h": self.h, "s": self.s, "l": self.l}


@dataclass(frozen=True)
class Color:
    """
    A palette color.

    ``hex`` is derived from ``rgb`` on access and is never stored separately.
    ``percentage`` is only set on extraction results.
    """
    rgb: RGB
    hsl: HSL
    name: Optional[str] = None
    percentage: Optional[float] = None

    @property
    def hex(self) -> str:
        return self.rgb.to_hex()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "hex": self.hex,
            "rgb": self.rgb.to_dict(),
            "hsl": self.hsl.to_dict(),
        }
        if self.name is not None:
            data["name"] = self.name
        if self.percentage is not None:
            data["percentage"] = self.percentage
        return data


@dataclass(frozen=True)
class NamedColor:
    """Reference entry of the named-color dictionary."""
    name: str
    rgb: RGB
    family: str


@dataclass(frozen=True)
class ColorBucket:
    """Transient median-cut partition with its per-channel bounding box."""
    colors: np.ndarray = field(repr=False, compare=False)
    minimum: RGB
    maximum: RGB

    @classmethod
    def from_colors(cls, colors: np.ndarray) -> "ColorBucket":
        if len(colors) == 0:
            return cls(colors=colors, minimum=RGB(255, 255, 255), maximum=RGB(0, 0, 0))
        return cls(
            colors=colors,
            minimum=RGB.from_sequence(colors.min(axis=0)),
            maximum=RGB.from_sequence(colors.max(axis=0)),
        )

    def channel_ranges(self) -> List[int]:
        return [hi - lo for lo, hi in zip(self.minimum, self.maximum)]

    def widest_channel(self) -> int:
        """Index of the channel with the largest range; ties go to R, then G."""
        return int(np.argmax(self.channel_ranges()))

    @property
    def centroid(self) -> RGB:
        if len(self.colors) == 0:
            return RGB(0, 0, 0)
        return RGB.from_sequence(self.colors.mean(axis=0))


@dataclass(frozen=True)
class ColorCluster:
    """A k-means cluster; ``weight`` is the share of all sampled pixels (0-1)."""
    centroid: RGB
    members: np.ndarray = field(repr=False, compare=False)
    weight: float

    @property
    def percentage(self) -> float:
        return self.weight * 100

    def merged_with(self, other: "ColorCluster") -> "ColorCluster":
        """Absorb another cluster, keeping this cluster's centroid."""
        return replace(
            self,
            members=np.concatenate([self.members, other.members]),
            weight=self.weight + other.weight,
        )


@dataclass(frozen=True)
class ExtractionOptions:
    color_count: int = 6
    include_transparent: bool = False

    def __post_init__(self):
        if self.color_count < 1:
            raise ValueError(f"color_count must be at least 1, got {self.color_count}")


@dataclass(frozen=True)
class ExtractionResult:
    """Ranked extraction output; ``dominant_color`` is always ``colors[0]``."""
    colors: List[Color]
    dominant_color: Color
    processing_time: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": [color.to_dict() for color in self.colors],
            "dominant_color": self.dominant_color.to_dict(),
            "processing_time": self.processing_time,
        }
