"""Placement configuration and its environment defaults."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .models import Fit, ScalePermissions
from .validator import (
    ConfigValidationError,
    check_fit,
    check_scale,
    parse_fit,
    parse_scale,
    parse_weight,
    validate_weight,
)

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 0.5

ENV_VARS = {
    "x_weight": "IMAGEFIT_X_WEIGHT",
    "y_weight": "IMAGEFIT_Y_WEIGHT",
    "fit": "IMAGEFIT_FIT",
    "scale": "IMAGEFIT_SCALE",
}


@dataclass(frozen=True)
class FitConfig:
    """Validated placement parameters.

    Instances are immutable: every ``with_*`` method returns a new, validated
    config and leaves the original untouched.

    Attributes:
        x_weight: Horizontal anchor in [0, 1]. 0 binds the image to the left,
            1 to the right, 0.5 centers the crop or the margins.
        y_weight: Vertical anchor in [0, 1]. 0 binds the image to the top,
            1 to the bottom.
        fit: Which container dimension the image is scaled against. Has no
            effect when scaling is disabled.
        scale: Allowed scaling directions.
    """

    x_weight: float = DEFAULT_WEIGHT
    y_weight: float = DEFAULT_WEIGHT
    fit: Fit = Fit.INSIDE
    scale: ScalePermissions = field(default_factory=ScalePermissions.both)

    def __post_init__(self) -> None:
        object.__setattr__(self, "x_weight", validate_weight(self.x_weight, "x_weight"))
        object.__setattr__(self, "y_weight", validate_weight(self.y_weight, "y_weight"))
        check_fit(self.fit)
        check_scale(self.scale)

    def with_x_weight(self, x_weight: float) -> FitConfig:
        return replace(self, x_weight=x_weight)

    def with_y_weight(self, y_weight: float) -> FitConfig:
        return replace(self, y_weight=y_weight)

    def with_fit(self, fit: Fit) -> FitConfig:
        return replace(self, fit=fit)

    def with_scale(self, scale: ScalePermissions) -> FitConfig:
        return replace(self, scale=scale)

    def with_downscale(self, downscale: bool) -> FitConfig:
        """Allow or forbid downscaling, keeping the upscale flag."""
        return replace(self, scale=replace(self.scale, downscale=bool(downscale)))

    def with_upscale(self, upscale: bool) -> FitConfig:
        """Allow or forbid upscaling, keeping the downscale flag."""
        return replace(self, scale=replace(self.scale, upscale=bool(upscale)))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "x_weight": self.x_weight,
            "y_weight": self.y_weight,
            "fit": self.fit.value,
            "scale": list(self.scale.names),
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict, base: FitConfig | None = None) -> FitConfig:
        """Create from a dictionary of external configuration values.

        Missing fields are taken from ``base`` (or the defaults). Values may
        use any encoding accepted by the validator: weights as numbers or
        numeric strings, fit as a name or attribute integer, scale as names
        or integer flags.

        Raises:
            ConfigValidationError: If the dictionary has unknown fields or
                any value is rejected.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Config must be an object")
        unknown = sorted(set(data) - set(ENV_VARS))
        if unknown:
            raise ConfigValidationError(f"Unknown config field: {unknown[0]}")

        config = base or cls()
        return cls(
            x_weight=parse_weight(data["x_weight"], "x_weight")
            if "x_weight" in data
            else config.x_weight,
            y_weight=parse_weight(data["y_weight"], "y_weight")
            if "y_weight" in data
            else config.y_weight,
            fit=parse_fit(data["fit"]) if "fit" in data else config.fit,
            scale=parse_scale(data["scale"]) if "scale" in data else config.scale,
        )

    @classmethod
    def from_json(cls, json_str: str, base: FitConfig | None = None) -> FitConfig:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str), base=base)


def load_config(path: str | Path, base: FitConfig | None = None) -> FitConfig:
    """Load a config from a JSON file.

    Raises:
        ConfigValidationError: If the file content is rejected.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        config = FitConfig.from_json(f.read(), base=base)
    logger.debug(f"Loaded config from {path}: {config}")
    return config


def get_default_config() -> FitConfig:
    """Get defaults from IMAGEFIT_* environment variables, falling back to built-ins."""
    data = {}
    for name, var in ENV_VARS.items():
        value = os.environ.get(var)
        if value is not None:
            data[name] = value
    return FitConfig.from_dict(data)
