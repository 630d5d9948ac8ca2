"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cli.__main__ import EXIT_IMAGE_ERROR, EXIT_VALIDATION_ERROR, cli


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, sample_config_dict: dict) -> Path:
    """JSON config file with the sample config."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(sample_config_dict), encoding="utf-8")
    return path


class TestCompute:
    """Tests for the compute command."""

    def test_text_output(self, runner: CliRunner) -> None:
        """Test default config on a square image."""
        result = runner.invoke(cli, ["compute", "--container", "100x100", "--image-size", "50x50"])
        assert result.exit_code == 0
        assert "Scale: 2" in result.output
        assert "Translate: 0, 0" in result.output
        assert "Placed: x=0 y=0 w=100 h=100" in result.output

    def test_json_output(self, runner: CliRunner) -> None:
        """Test JSON output with explicit options."""
        result = runner.invoke(
            cli,
            [
                "compute",
                "--container",
                "200x100",
                "--image-size",
                "100x100",
                "--fit",
                "outside",
                "--x-weight",
                "0",
                "--y-weight",
                "0.5",
                "--json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["scale"] == pytest.approx(2)
        assert data["tx"] == pytest.approx(0)
        assert data["ty"] == pytest.approx(-50)
        assert data["placed"]["w"] == pytest.approx(200)

    def test_scale_none(self, runner: CliRunner) -> None:
        """Test disabling scaling from the command line."""
        result = runner.invoke(
            cli,
            ["compute", "--container", "100x100", "--image-size", "50x50", "--scale", "none"],
        )
        assert result.exit_code == 0
        assert "Scale: 1" in result.output
        assert "Translate: 25, 25" in result.output

    def test_image_file(self, runner: CliRunner, sample_image: Path) -> None:
        """Test reading the image size from a file."""
        result = runner.invoke(
            cli, ["compute", "--container", "80x80", "--image", str(sample_image)]
        )
        assert result.exit_code == 0
        assert "Scale: 2" in result.output
        assert "Translate: 0, 20" in result.output

    def test_unreadable_image(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a file that is not an image."""
        path = tmp_path / "fake.png"
        path.write_text("not an image", encoding="utf-8")
        result = runner.invoke(cli, ["compute", "--container", "80x80", "--image", str(path)])
        assert result.exit_code == EXIT_IMAGE_ERROR

    def test_config_file_and_override(self, runner: CliRunner, config_file: Path) -> None:
        """Test CLI options take precedence over the config file."""
        result = runner.invoke(
            cli,
            [
                "compute",
                "--container",
                "100x100",
                "--image-size",
                "200x200",
                "--config",
                str(config_file),
                "--y-weight",
                "0",
                "--json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["scale"] == pytest.approx(0.5)
        assert data["ty"] == pytest.approx(0)

    def test_env_defaults(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test IMAGEFIT_* variables are used as defaults."""
        monkeypatch.setenv("IMAGEFIT_SCALE", "downscale")
        result = runner.invoke(cli, ["compute", "--container", "100x100", "--image-size", "50x50"])
        assert result.exit_code == 0
        assert "Scale: 1" in result.output

    def test_invalid_weight(self, runner: CliRunner) -> None:
        """Test out-of-range weights fail with a validation error."""
        result = runner.invoke(
            cli,
            ["compute", "--container", "100x100", "--image-size", "50x50", "--x-weight", "2"],
        )
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "x_weight must be in [0;1]" in result.output

    def test_invalid_scale(self, runner: CliRunner) -> None:
        """Test unknown scale names fail with a validation error."""
        result = runner.invoke(
            cli,
            ["compute", "--container", "100x100", "--image-size", "50x50", "--scale", "8"],
        )
        assert result.exit_code == EXIT_VALIDATION_ERROR

    def test_invalid_container(self, runner: CliRunner) -> None:
        """Test malformed container size."""
        result = runner.invoke(cli, ["compute", "--container", "wide", "--image-size", "50x50"])
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "Invalid container size" in result.output

    def test_image_source_required(self, runner: CliRunner) -> None:
        """Test exactly one image source is required."""
        result = runner.invoke(cli, ["compute", "--container", "100x100"])
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "exactly one of --image-size or --image" in result.output

    def test_json_zero_image_is_strict(self, runner: CliRunner) -> None:
        """Test infinite and NaN results are written as null in JSON output."""
        result = runner.invoke(
            cli,
            [
                "compute",
                "--container",
                "100x100",
                "--image-size",
                "0x100",
                "--fit",
                "horizontal",
                "--json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output, parse_constant=_reject_constant)
        assert data["scale"] is None
        assert data["tx"] is None
        assert data["ty"] is None
        assert data["placed"] == {"x": None, "y": None, "w": None, "h": None}
        assert data["image"] == {"width": 0, "height": 100}

    def test_json_includes_image_size(self, runner: CliRunner, sample_image: Path) -> None:
        """Test the JSON output reports the image size it used."""
        result = runner.invoke(
            cli, ["compute", "--container", "80x80", "--image", str(sample_image), "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["image"] == {"width": 40, "height": 20}

    def test_config_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a directory is refused as a config file."""
        result = runner.invoke(
            cli,
            ["compute", "--container", "100x100", "--image-size", "50x50", "--config", str(tmp_path)],
        )
        assert result.exit_code == 2
        assert "is a directory" in result.output

    def test_config_not_utf8(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an undecodable config file fails with a validation error."""
        path = tmp_path / "config.json"
        path.write_bytes(b"\xff\xfe\xfa{}")
        result = runner.invoke(
            cli,
            ["compute", "--container", "100x100", "--image-size", "50x50", "--config", str(path)],
        )
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "Cannot read config file" in result.output


class TestPlace:
    """Tests for the place command."""

    def test_matrix_output(self, runner: CliRunner) -> None:
        """Test layout pass with padding prints the affine matrix."""
        result = runner.invoke(
            cli,
            [
                "place",
                "--bounds",
                "0,0,100,100",
                "--padding",
                "10,0,10,0",
                "--image-size",
                "40x40",
            ],
        )
        assert result.exit_code == 0
        rows = [line.split() for line in result.output.strip().splitlines()]
        assert rows == [["2", "0", "0"], ["0", "2", "10"], ["0", "0", "1"]]

    def test_invalid_bounds(self, runner: CliRunner) -> None:
        """Test bounds need four values."""
        result = runner.invoke(cli, ["place", "--bounds", "0,0,100", "--image-size", "40x40"])
        assert result.exit_code == EXIT_VALIDATION_ERROR


class TestValidate:
    """Tests for the validate command."""

    def test_valid(self, runner: CliRunner, config_file: Path) -> None:
        """Test a valid config file."""
        result = runner.invoke(cli, ["validate", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Valid config" in result.output
        assert "Weights: x=0.25 y=1" in result.output
        assert "Fit: outside" in result.output
        assert "Scale: downscale" in result.output

    def test_invalid_fit(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an unknown fit policy."""
        path = tmp_path / "config.json"
        path.write_text('{"fit": "stretch"}', encoding="utf-8")
        result = runner.invoke(cli, ["validate", "--config", str(path)])
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "Unknown fit policy" in result.output

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test malformed JSON."""
        path = tmp_path / "config.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(cli, ["validate", "--config", str(path)])
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "Invalid JSON" in result.output

    def test_not_utf8(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an undecodable config file."""
        path = tmp_path / "config.json"
        path.write_bytes(b"\xff\xfe\xfa{}")
        result = runner.invoke(cli, ["validate", "--config", str(path)])
        assert result.exit_code == EXIT_VALIDATION_ERROR
        assert "Cannot read config file" in result.output

    def test_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a directory is refused."""
        result = runner.invoke(cli, ["validate", "--config", str(tmp_path)])
        assert result.exit_code == 2
        assert "is a directory" in result.output


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-standard JSON token {name}")
