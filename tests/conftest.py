"""Pytest fixtures for imagefit tests."""

from pathlib import Path

import pytest
from PIL import Image

from imagefit.config import ENV_VARS, FitConfig
from imagefit.models import Fit, ScalePermissions


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove IMAGEFIT_* variables so defaults are predictable."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def both() -> ScalePermissions:
    """Downscaling and upscaling allowed."""
    return ScalePermissions.both()


@pytest.fixture
def default_config() -> FitConfig:
    """Built-in default config."""
    return FitConfig()


@pytest.fixture
def top_left_outside() -> FitConfig:
    """Cropping config anchored to the top-left corner."""
    return FitConfig(x_weight=0, y_weight=0, fit=Fit.OUTSIDE)


@pytest.fixture
def sample_config_dict() -> dict:
    """Sample config as raw dict (before validation)."""
    return {
        "x_weight": 0.25,
        "y_weight": 1,
        "fit": "outside",
        "scale": ["downscale"],
    }


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    """A 40x20 PNG file."""
    path = tmp_path / "sample.png"
    Image.new("RGB", (40, 20), color="white").save(path)
    return path
