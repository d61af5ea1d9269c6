#!filepath: tests/test_cli.py
import pytest
import yaml
from typer.testing import CliRunner

from heldout import __version__
from heldout.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    data = {
        "log": {"dir": str(tmp_path / "logs"), "level": "INFO"},
        "task": {
            "learner": {"type": "majority_class"},
            "stream": {"type": "hyperplane", "params": {"seed": 4, "max_examples": 700}},
            "test_size": 100,
            "sample_frequency": 200,
            "cache_test": True,
        },
    }
    path = tmp_path / "run.yml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_prints_curve(config_file, tmp_path):
    dump = tmp_path / "curve.csv"

    result = runner.invoke(app, ["run", str(config_file), "--dump-file", str(dump)])

    assert result.exit_code == 0, result.output
    assert "Learning curve" in result.output
    # 600 to train, chunks of 200: 200 and 400 recorded, 600 drains the stream
    assert len(dump.read_text(encoding="utf-8").splitlines()) == 3


def test_run_overrides_and_plot(config_file, tmp_path):
    plot = tmp_path / "curve.png"

    result = runner.invoke(
        app,
        [
            "run", str(config_file),
            "-f", "100",
            "-n", "50",
            "--no-cache-test",
            "--plot", str(plot),
        ],
    )

    assert result.exit_code == 0, result.output
    assert plot.exists()


def test_run_missing_config(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "missing.yml")])

    assert result.exit_code != 0
