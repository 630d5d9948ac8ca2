"""Stateful placement of an image inside a padded container."""

from __future__ import annotations

import logging

from .config import FitConfig
from .geometry import compute_transform
from .models import Fit, Padding, ScalePermissions, Size, Transform
from .validator import ConfigValidationError

logger = logging.getLogger(__name__)


class ImagePlacer:
    """Keeps placement parameters and recomputes the transform on layout.

    Every setter validates its value before storing it. A rejected value
    raises and leaves the current configuration in place. Setting a value
    equal to the current one is a no-op; otherwise ``needs_layout`` is set
    until the next call to ``layout``.
    """

    def __init__(
        self,
        config: FitConfig | None = None,
        padding: Padding | None = None,
        image_size: Size | None = None,
    ) -> None:
        self._config = _check_config(FitConfig() if config is None else config)
        self._padding = _check_padding(Padding() if padding is None else padding)
        self._image_size = _check_image_size(image_size)
        self._transform: Transform | None = None
        self.needs_layout = True

    @property
    def config(self) -> FitConfig:
        return self._config

    @property
    def padding(self) -> Padding:
        return self._padding

    @property
    def image_size(self) -> Size | None:
        return self._image_size

    @property
    def transform(self) -> Transform | None:
        """Transform from the last layout pass, if any."""
        return self._transform

    def update(self, config: FitConfig) -> bool:
        """Replace the config.

        Returns:
            True if the config changed and a layout was requested.

        Raises:
            ConfigValidationError: If ``config`` is not a FitConfig.
        """
        _check_config(config)
        if config == self._config:
            return False
        logger.debug(f"Config changed: {self._config} -> {config}")
        self._config = config
        self.needs_layout = True
        return True

    def set_x_weight(self, x_weight: float) -> bool:
        return self.update(self._config.with_x_weight(x_weight))

    def set_y_weight(self, y_weight: float) -> bool:
        return self.update(self._config.with_y_weight(y_weight))

    def set_fit(self, fit: Fit) -> bool:
        return self.update(self._config.with_fit(fit))

    def set_scale(self, scale: ScalePermissions) -> bool:
        return self.update(self._config.with_scale(scale))

    def set_downscale(self, downscale: bool) -> bool:
        return self.update(self._config.with_downscale(downscale))

    def set_upscale(self, upscale: bool) -> bool:
        return self.update(self._config.with_upscale(upscale))

    def set_padding(self, padding: Padding) -> bool:
        _check_padding(padding)
        if padding == self._padding:
            return False
        self._padding = padding
        self.needs_layout = True
        return True

    def set_image_size(self, image_size: Size | None) -> bool:
        """Set the intrinsic image size, or None when there is no image."""
        _check_image_size(image_size)
        if image_size == self._image_size:
            return False
        self._image_size = image_size
        self.needs_layout = True
        return True

    def layout(self, left: float, top: float, right: float, bottom: float) -> Transform | None:
        """Compute the transform for the container bounds.

        The padding is subtracted from the bounds, so the content area may
        end up with a zero or negative size.

        Returns:
            The new transform, or None if there is no image to place.
        """
        self.needs_layout = False
        if self._image_size is None:
            logger.debug("No image to place")
            self._transform = None
            return None

        w = right - left - self._padding.left - self._padding.right
        h = bottom - top - self._padding.top - self._padding.bottom
        config = self._config
        self._transform = compute_transform(
            w,
            h,
            self._image_size.width,
            self._image_size.height,
            config.x_weight,
            config.y_weight,
            config.fit,
            config.scale,
        )
        logger.debug(f"Layout {w}x{h} for image {self._image_size}: {self._transform}")
        return self._transform


def _check_config(config: FitConfig) -> FitConfig:
    if not isinstance(config, FitConfig):
        raise ConfigValidationError(f"Invalid config: {config!r}")
    return config


def _check_padding(padding: Padding) -> Padding:
    if not isinstance(padding, Padding):
        raise ConfigValidationError(f"Invalid padding: {padding!r}")
    return padding


def _check_image_size(image_size: Size | None) -> Size | None:
    if image_size is not None and not isinstance(image_size, Size):
        raise ConfigValidationError(f"Invalid image size: {image_size!r}")
    return image_size
