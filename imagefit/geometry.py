"""Placement transform of an image inside a container."""

from __future__ import annotations

import math

from .config import FitConfig
from .models import Fit, ScalePermissions, Size, Transform
from .validator import check_fit, check_scale, validate_weight


def _as_float(value: float) -> float:
    """Convert to float; integers too large for a float become infinite."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics when the denominator is zero."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def compute_transform(
    container_w: float,
    container_h: float,
    image_w: float,
    image_h: float,
    x_weight: float,
    y_weight: float,
    fit: Fit,
    scale: ScalePermissions,
) -> Transform:
    """Compute the transform placing an image inside a container.

    The aspect ratio is always preserved. ``fit`` selects the container
    dimension the image is scaled against, ``scale`` restricts the scaling
    direction, and the weights distribute the remaining margin (or crop)
    along each axis.

    Degenerate geometry never raises: a negative container dimension yields
    a scale of 0 instead of a mirrored image, and a zero image dimension
    follows float division semantics (infinite or NaN scale).

    Args:
        container_w: Container width, possibly zero or negative.
        container_h: Container height, possibly zero or negative.
        image_w: Image width.
        image_h: Image height.
        x_weight: Horizontal anchor in [0, 1].
        y_weight: Vertical anchor in [0, 1].
        fit: Fit policy.
        scale: Allowed scaling directions.

    Returns:
        Transform with uniform scale and translation.

    Raises:
        InvalidWeight: If a weight is outside [0, 1].
        InvalidFitPolicy: If ``fit`` is not a Fit.
        InvalidScalePermissions: If ``scale`` is not a ScalePermissions.
    """
    x_weight = validate_weight(x_weight, "x_weight")
    y_weight = validate_weight(y_weight, "y_weight")
    check_fit(fit)
    check_scale(scale)
    container_w = _as_float(container_w)
    container_h = _as_float(container_h)
    image_w = _as_float(image_w)
    image_h = _as_float(image_h)

    if not scale.enabled:
        factor = 1.0
    else:
        image_has_greater_ar = image_w * container_h > image_h * container_w
        if (
            fit is Fit.HORIZONTAL
            or (fit is Fit.INSIDE and image_has_greater_ar)
            or (fit is Fit.OUTSIDE and not image_has_greater_ar)
        ):
            factor = _divide(container_w, image_w)
        else:
            factor = _divide(container_h, image_h)

        if not scale.permits(factor):
            factor = 1.0
        elif factor < 0:
            # Only when the padding exceeds the container; never mirror the image.
            factor = 0.0

    tx = x_weight * (container_w - image_w * factor)
    ty = y_weight * (container_h - image_h * factor)
    return Transform(scale=factor, tx=tx, ty=ty)


def compute_transform_for(
    container: Size, image: Size, config: FitConfig | None = None
) -> Transform:
    """Compute the transform from sizes and a config (defaults if omitted)."""
    config = config or FitConfig()
    return compute_transform(
        container.width,
        container.height,
        image.width,
        image.height,
        config.x_weight,
        config.y_weight,
        config.fit,
        config.scale,
    )
