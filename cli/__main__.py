"""CLI entry point for imagefit."""

import json
import logging
import math
import sys
from pathlib import Path

import click
from dotenv import load_dotenv


# Load .env file - search current directory and parent directories
def _load_env_file() -> None:
    """Load .env file from current directory or project root."""
    current = Path.cwd()

    # Check current directory first
    env_path = current / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
        return

    # Walk up to find .env near pyproject.toml
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            env_path = parent / ".env"
            if env_path.exists():
                load_dotenv(env_path, override=False)
            return


_load_env_file()

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_IMAGE_ERROR = 2

FIT_CHOICES = ["inside", "outside", "horizontal", "vertical"]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fmt(value: float) -> str:
    return f"{value:g}"


def _json_safe(data: dict) -> dict:
    """Replace infinite and NaN values with None so the output is strict JSON."""
    safe = {}
    for key, value in data.items():
        if isinstance(value, dict):
            safe[key] = _json_safe(value)
        elif isinstance(value, float) and not math.isfinite(value):
            safe[key] = None
        else:
            safe[key] = value
    return safe


def _resolve_image_size(image_size: str | None, image: str | None):
    """Get the image size from --image-size or from an image file."""
    from imagefit.images import ImageReadError, get_image_size
    from imagefit.models import Size

    if bool(image_size) == bool(image):
        click.echo("Error: Provide exactly one of --image-size or --image", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)

    if image:
        try:
            return get_image_size(image)
        except ImageReadError as e:
            click.echo(f"Image error: {e}", err=True)
            sys.exit(EXIT_IMAGE_ERROR)

    try:
        return Size.parse(image_size)
    except ValueError as e:
        click.echo(f"Invalid image size: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)


def _resolve_config(config_path: str | None, overrides: dict):
    """Build a config from environment defaults, a config file and CLI overrides."""
    from imagefit.config import FitConfig, get_default_config, load_config
    from imagefit.validator import ConfigValidationError

    logger = logging.getLogger(__name__)

    try:
        config = get_default_config()
        if config_path:
            config = load_config(config_path, base=config)
        config = FitConfig.from_dict(
            {k: v for k, v in overrides.items() if v is not None}, base=config
        )
    except ConfigValidationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)
    except json.JSONDecodeError as e:
        click.echo(f"Invalid JSON in config file: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Cannot read config file: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)

    logger.debug(f"Using config: {config}")
    return config


def config_options(f):
    """Options shared by the commands that compute a transform."""
    options = [
        click.option(
            "--image-size",
            default=None,
            help="Image size as WIDTHxHEIGHT.",
        ),
        click.option(
            "--image",
            default=None,
            type=click.Path(exists=True, dir_okay=False),
            help="Image file to read the size from.",
        ),
        click.option(
            "--x-weight",
            type=float,
            default=None,
            help="Horizontal anchor in [0,1] (default: IMAGEFIT_X_WEIGHT or 0.5).",
        ),
        click.option(
            "--y-weight",
            type=float,
            default=None,
            help="Vertical anchor in [0,1] (default: IMAGEFIT_Y_WEIGHT or 0.5).",
        ),
        click.option(
            "--fit",
            type=click.Choice(FIT_CHOICES, case_sensitive=False),
            default=None,
            help="Fit policy (default: IMAGEFIT_FIT or 'inside').",
        ),
        click.option(
            "--scale",
            default=None,
            help="Allowed scaling: 'downscale', 'upscale', 'both' or 'none' "
            "(default: IMAGEFIT_SCALE or 'both').",
        ),
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Path to a JSON config file.",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
def cli(verbose: bool) -> None:
    """Weighted image fitting tool."""
    setup_logging(verbose)


@cli.command()
@click.option(
    "--container",
    required=True,
    help="Container size as WIDTHxHEIGHT.",
)
@config_options
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def compute(
    container: str,
    image_size: str | None,
    image: str | None,
    x_weight: float | None,
    y_weight: float | None,
    fit: str | None,
    scale: str | None,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Compute the transform placing an image inside a container."""
    from imagefit.geometry import compute_transform_for
    from imagefit.models import Size

    try:
        container_size = Size.parse(container)
    except ValueError as e:
        click.echo(f"Invalid container size: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)

    img = _resolve_image_size(image_size, image)
    config = _resolve_config(
        config_path,
        {"x_weight": x_weight, "y_weight": y_weight, "fit": fit, "scale": scale},
    )

    transform = compute_transform_for(container_size, img, config)
    x, y, w, h = transform.placed_rect(img)

    if as_json:
        output = transform.to_dict()
        output["image"] = img.to_dict()
        output["placed"] = {"x": x, "y": y, "w": w, "h": h}
        click.echo(json.dumps(_json_safe(output), indent=2, allow_nan=False))
    else:
        click.echo(f"Scale: {_fmt(transform.scale)}")
        click.echo(f"Translate: {_fmt(transform.tx)}, {_fmt(transform.ty)}")
        click.echo(f"Placed: x={_fmt(x)} y={_fmt(y)} w={_fmt(w)} h={_fmt(h)}")
    sys.exit(EXIT_SUCCESS)


@cli.command()
@click.option(
    "--bounds",
    required=True,
    help="Container bounds as LEFT,TOP,RIGHT,BOTTOM.",
)
@click.option(
    "--padding",
    default="0",
    help="Container padding as LEFT,TOP,RIGHT,BOTTOM or a single value.",
)
@config_options
def place(
    bounds: str,
    padding: str,
    image_size: str | None,
    image: str | None,
    x_weight: float | None,
    y_weight: float | None,
    fit: str | None,
    scale: str | None,
    config_path: str | None,
) -> None:
    """Run a layout pass for a padded container and print the image matrix."""
    from imagefit.models import Padding
    from imagefit.placer import ImagePlacer

    try:
        parts = bounds.split(",")
        if len(parts) != 4:
            raise ValueError(f"Expected LEFT,TOP,RIGHT,BOTTOM, got {bounds!r}")
        left, top, right, bottom = (float(p) for p in parts)
        pad = Padding.parse(padding)
    except ValueError as e:
        click.echo(f"Invalid bounds or padding: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)

    img = _resolve_image_size(image_size, image)
    config = _resolve_config(
        config_path,
        {"x_weight": x_weight, "y_weight": y_weight, "fit": fit, "scale": scale},
    )

    placer = ImagePlacer(config=config, padding=pad, image_size=img)
    transform = placer.layout(left, top, right, bottom)

    for row in transform.to_matrix():
        click.echo(" ".join(f"{_fmt(v):>10}" for v in row))
    sys.exit(EXIT_SUCCESS)


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a JSON config file.",
)
def validate(config_path: str) -> None:
    """Validate a JSON config file."""
    from imagefit.config import load_config
    from imagefit.validator import ConfigValidationError

    try:
        config = load_config(config_path)
    except ConfigValidationError as e:
        click.echo(f"Validation error: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)
    except json.JSONDecodeError as e:
        click.echo(f"Invalid JSON: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Cannot read config file: {e}", err=True)
        sys.exit(EXIT_VALIDATION_ERROR)

    click.echo("Valid config")
    click.echo(f"Weights: x={_fmt(config.x_weight)} y={_fmt(config.y_weight)}")
    click.echo(f"Fit: {config.fit.value}")
    click.echo(f"Scale: {', '.join(config.scale.names) or 'none'}")
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    cli()
