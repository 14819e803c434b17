"""
Tests for the gridcrs command line.
"""
import textwrap

import pytest
from typer.testing import CliRunner

from gridcrs.cli import app

runner = CliRunner()

MODEL_YML = textwrap.dedent("""
    name: model
    axes:
      - {name: time, kind: Time, units: hours since 2000-01-01, start: 0, increment: 6, size: 4}
      - {name: lat, kind: Lat, units: degrees_north, start: -90, increment: 1, size: 181}
      - {name: lon, kind: Lon, units: degrees_east, start: 0, increment: 1, size: 360}
""")

IRREGULAR_YML = textwrap.dedent("""
    name: soundings
    axes:
      - {name: depth, kind: Height, units: m, values: [0, 5, 20, 100]}
""")


@pytest.fixture
def model(tmp_path):
    path = tmp_path / "model.yml"
    path.write_text(MODEL_YML, encoding="utf-8")
    return path


@pytest.fixture
def irregular(tmp_path):
    path = tmp_path / "irregular.yml"
    path.write_text(IRREGULAR_YML, encoding="utf-8")
    return path


def test_describe(model):
    result = runner.invoke(app, ["describe", "--config", str(model)])
    assert result.exit_code == 0, result.output
    assert "CompoundCRS" in result.output
    assert "GeographicCRS" in result.output
    assert "TemporalCRS" in result.output
    assert "Grid to CRS" in result.output


def test_describe_irregular_warns(irregular):
    result = runner.invoke(app, ["describe", "-c", str(irregular)])
    assert result.exit_code == 0, result.output
    assert "VerticalCRS" in result.output
    assert "No grid-to-CRS transform" in result.output


def test_describe_writes_log(model, tmp_path, monkeypatch):
    from gridcrs.globals import directories

    logs = tmp_path / "logs"
    monkeypatch.setattr(directories, "LOGS_DIR", logs)
    result = runner.invoke(app, ["describe", "-c", str(model), "--log"])
    assert result.exit_code == 0, result.output
    assert len(list(logs.glob("gridcrs_*.log"))) == 1


def test_transform(model):
    result = runner.invoke(app, ["transform", "-c", str(model), "--lower", "0", "--upper", "2"])
    assert result.exit_code == 0, result.output
    last = result.output.strip().splitlines()[-1]
    assert last.split()[-3:] == ["0", "0", "1"]
    assert "-90" in result.output


def test_transform_irregular(irregular):
    result = runner.invoke(app, ["transform", "-c", str(irregular)])
    assert result.exit_code == 1


def test_transform_illegal_range(model):
    result = runner.invoke(app, ["transform", "-c", str(model), "--upper", "9"])
    assert result.exit_code == 2
    assert "Illegal range" in result.output


def test_needs_exactly_one_source(model):
    assert runner.invoke(app, ["describe"]).exit_code == 2
    assert runner.invoke(app, ["describe", "-c", str(model), "-r", str(model)]).exit_code == 2


def test_bad_config(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("axes: []\n", encoding="utf-8")
    result = runner.invoke(app, ["describe", "-c", str(path)])
    assert result.exit_code == 2
    assert "Could not build CRS" in result.output


def test_test_command():
    result = runner.invoke(app, ["test"])
    assert result.exit_code == 0
    assert "successfully" in result.output
