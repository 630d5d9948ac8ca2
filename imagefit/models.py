"""Value types for image placement."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DOWNSCALE = 1 << 0
UPSCALE = 1 << 1


class Fit(Enum):
    """How the image is fitted to the container."""

    # Add margins to display the whole image content.
    INSIDE = "inside"
    # Crop the image to fill the container.
    OUTSIDE = "outside"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def attr_value(self) -> int:
        """Integer encoding used by attribute-style configuration."""
        return list(Fit).index(self)


@dataclass(frozen=True)
class ScalePermissions:
    """Scaling directions the image is allowed to take."""

    downscale: bool = False
    upscale: bool = False

    @classmethod
    def none(cls) -> ScalePermissions:
        """Never scale."""
        return cls(downscale=False, upscale=False)

    @classmethod
    def both(cls) -> ScalePermissions:
        """Allow both downscaling and upscaling."""
        return cls(downscale=True, upscale=True)

    @property
    def enabled(self) -> bool:
        """Check if any scaling direction is allowed."""
        return self.downscale or self.upscale

    @property
    def flags(self) -> int:
        """Bitwise combination of DOWNSCALE and UPSCALE."""
        return (DOWNSCALE if self.downscale else 0) | (UPSCALE if self.upscale else 0)

    @property
    def names(self) -> tuple[str, ...]:
        """Names of the allowed directions, for serialization."""
        names = []
        if self.downscale:
            names.append("downscale")
        if self.upscale:
            names.append("upscale")
        return tuple(names)

    def permits(self, scale: float) -> bool:
        """Check if a scale factor respects these permissions.

        A factor of exactly 1 is always permitted.
        """
        if scale > 1 and not self.upscale:
            return False
        if scale < 1 and not self.downscale:
            return False
        return True


@dataclass(frozen=True)
class Size:
    """Width and height, in pixels. Not required to be positive."""

    width: float
    height: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"width": self.width, "height": self.height}

    @classmethod
    def parse(cls, text: str) -> Size:
        """Parse a ``WIDTHxHEIGHT`` string such as ``"1600x900"``.

        Raises:
            ValueError: If the text is not two numbers separated by ``x``.
        """
        parts = text.lower().split("x")
        if len(parts) != 2:
            raise ValueError(f"Expected WIDTHxHEIGHT, got {text!r}")
        return cls(width=_number(parts[0]), height=_number(parts[1]))


@dataclass(frozen=True)
class Padding:
    """Inner padding of a container, in pixels."""

    left: float = 0
    top: float = 0
    right: float = 0
    bottom: float = 0

    @classmethod
    def parse(cls, text: str) -> Padding:
        """Parse ``LEFT,TOP,RIGHT,BOTTOM``; a single value applies to all sides."""
        values = [_number(p) for p in text.split(",")]
        if len(values) == 1:
            return cls(*(values * 4))
        if len(values) != 4:
            raise ValueError(f"Expected 1 or 4 comma-separated values, got {text!r}")
        return cls(*values)


@dataclass(frozen=True)
class Transform:
    """Uniform scale followed by a translation.

    Maps image coordinates (origin at the image's top-left corner) to
    container coordinates.
    """

    scale: float
    tx: float
    ty: float

    @property
    def scale_x(self) -> float:
        return self.scale

    @property
    def scale_y(self) -> float:
        return self.scale

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        """Map an image point to container coordinates."""
        return (x * self.scale + self.tx, y * self.scale + self.ty)

    def placed_rect(self, image: Size) -> tuple[float, float, float, float]:
        """Get the image rectangle in container coordinates.

        Returns:
            Tuple of (x, y, w, h).
        """
        return (self.tx, self.ty, image.width * self.scale, image.height * self.scale)

    def to_matrix(self) -> tuple[tuple[float, float, float], ...]:
        """Get the row-major 3x3 affine matrix."""
        return (
            (self.scale, 0.0, self.tx),
            (0.0, self.scale, self.ty),
            (0.0, 0.0, 1.0),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"scale": self.scale, "tx": self.tx, "ty": self.ty}


def _number(text: str) -> float:
    value = float(text.strip())
    return int(value) if value.is_integer() else value
