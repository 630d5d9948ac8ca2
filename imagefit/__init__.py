"""Weighted fit placement of an image inside a container."""

from .config import FitConfig, get_default_config, load_config
from .geometry import compute_transform, compute_transform_for
from .models import DOWNSCALE, UPSCALE, Fit, Padding, ScalePermissions, Size, Transform
from .placer import ImagePlacer
from .validator import (
    ConfigValidationError,
    InvalidFitPolicy,
    InvalidScalePermissions,
    InvalidWeight,
)

__all__ = [
    "DOWNSCALE",
    "UPSCALE",
    "ConfigValidationError",
    "Fit",
    "FitConfig",
    "ImagePlacer",
    "InvalidFitPolicy",
    "InvalidScalePermissions",
    "InvalidWeight",
    "Padding",
    "ScalePermissions",
    "Size",
    "Transform",
    "compute_transform",
    "compute_transform_for",
    "get_default_config",
    "load_config",
]
