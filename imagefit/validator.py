"""Validation of placement configuration values."""

from __future__ import annotations

import math

from .models import DOWNSCALE, UPSCALE, Fit, ScalePermissions

_SCALE_NAMES = {
    "downscale": ScalePermissions(downscale=True),
    "upscale": ScalePermissions(upscale=True),
    "both": ScalePermissions.both(),
    "none": ScalePermissions.none(),
}


class ConfigValidationError(ValueError):
    """Raised when a placement configuration value is rejected."""

    pass


class InvalidWeight(ConfigValidationError):
    """Raised when a weight is not a number in [0, 1]."""

    pass


class InvalidFitPolicy(ConfigValidationError):
    """Raised when a fit policy is not recognized."""

    pass


class InvalidScalePermissions(ConfigValidationError):
    """Raised when scale permissions contain unknown flags."""

    pass


def validate_weight(value: float, name: str = "weight") -> float:
    """Check that a weight is a number in [0, 1].

    Args:
        value: Weight to check.
        name: Field name used in error messages.

    Returns:
        The weight as a float.

    Raises:
        InvalidWeight: If the value is not a number or is out of range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidWeight(f"{name} must be a number: {value!r}")
    if math.isnan(value) or value < 0 or value > 1:
        raise InvalidWeight(f"{name} must be in [0;1]: {value}")
    return float(value)


def parse_weight(value: float | str, name: str = "weight") -> float:
    """Parse a weight from a number or a numeric string."""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InvalidWeight(f"{name} must be a number: {value!r}") from None
    return validate_weight(value, name)


def check_fit(value: Fit) -> Fit:
    """Check that a value is a Fit member."""
    if value is None:
        raise InvalidFitPolicy("The fit value cannot be None")
    if not isinstance(value, Fit):
        raise InvalidFitPolicy(f"Unknown fit policy: {value!r}")
    return value


def parse_fit(value: Fit | int | str) -> Fit:
    """Parse a fit policy.

    Accepts a Fit member, its name (case-insensitive) or its attribute
    integer encoding (0=inside, 1=outside, 2=horizontal, 3=vertical).

    Raises:
        InvalidFitPolicy: If the value does not name a fit policy.
    """
    if isinstance(value, Fit):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return _fit_from_attr_value(int(text))
        try:
            return Fit(text.lower())
        except ValueError:
            raise InvalidFitPolicy(f"Unknown fit policy: {value!r}") from None
    if isinstance(value, int) and not isinstance(value, bool):
        return _fit_from_attr_value(value)
    return check_fit(value)


def _fit_from_attr_value(value: int) -> Fit:
    members = list(Fit)
    if not 0 <= value < len(members):
        raise InvalidFitPolicy(f"Unknown fit attribute value: {value}")
    return members[value]


def check_scale(value: ScalePermissions) -> ScalePermissions:
    """Check that a value is a ScalePermissions instance."""
    if not isinstance(value, ScalePermissions):
        raise InvalidScalePermissions(f"Invalid scale permissions: {value!r}")
    return value


def scale_from_flags(flags: int) -> ScalePermissions:
    """Decode a bitwise combination of DOWNSCALE and UPSCALE.

    Raises:
        InvalidScalePermissions: If bits other than DOWNSCALE and UPSCALE are set.
    """
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise InvalidScalePermissions(f"Scale flags must be an integer: {flags!r}")
    if flags & (DOWNSCALE | UPSCALE) != flags:
        raise InvalidScalePermissions(
            f"Only DOWNSCALE and UPSCALE flags can be set: {flags}"
        )
    return ScalePermissions(downscale=bool(flags & DOWNSCALE), upscale=bool(flags & UPSCALE))


def parse_scale(value: ScalePermissions | int | str | list | tuple) -> ScalePermissions:
    """Parse scale permissions.

    Accepts a ScalePermissions instance, integer flags, a string of names
    separated by ``,`` or ``|`` (``"downscale|upscale"``, ``"both"``,
    ``"none"``, or empty), or a list of names.

    Raises:
        InvalidScalePermissions: If the value contains unknown flags or names.
    """
    if isinstance(value, ScalePermissions):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return scale_from_flags(int(text))
        names = [n for n in text.replace("|", ",").split(",") if n.strip()]
        return _scale_from_names(names)
    if isinstance(value, (list, tuple)):
        return _scale_from_names(value)
    return scale_from_flags(value)


def _scale_from_names(names: list | tuple) -> ScalePermissions:
    downscale = False
    upscale = False
    for name in names:
        if not isinstance(name, str):
            raise InvalidScalePermissions(f"Scale permission must be a name: {name!r}")
        permissions = _SCALE_NAMES.get(name.strip().lower())
        if permissions is None:
            raise InvalidScalePermissions(f"Unknown scale permission: {name!r}")
        downscale = downscale or permissions.downscale
        upscale = upscale or permissions.upscale
    return ScalePermissions(downscale=downscale, upscale=upscale)
