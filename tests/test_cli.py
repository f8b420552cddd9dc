import json

import pytest
from click.testing import CliRunner

from conftest import PNG_BYTES, region
from screen_audit import __version__, cli
from screen_audit.models import Config


@pytest.fixture(autouse=True)
def offline_config(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda env_file=None: Config())


@pytest.fixture
def screenshot(tmp_path):
    path = tmp_path / "shot.png"
    path.write_bytes(PNG_BYTES)
    return path


def test_version():
    result = CliRunner().invoke(cli.main, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_json_report_without_ai(screenshot):
    result = CliRunner().invoke(cli.main, ["analyze", str(screenshot), "--no-ai", "--output", "json"])

    assert result.exit_code == 0, result.output
    report = json.loads(result.stdout)
    assert report["generativeStatus"] == "disabled"
    assert report["generative"] is None
    assert set(report["overallScore"]["breakdown"]) == {"wcag", "contrast", "typography", "hierarchy", "sizing"}


def test_regions_file_is_used(screenshot, tmp_path):
    regions = tmp_path / "regions.json"
    regions.write_text(json.dumps({"regions": [region("Save", 0, 0, 30, 30)]}))

    result = CliRunner().invoke(cli.main, [
        "analyze", str(screenshot), "--no-ai", "--output", "json", "--regions", str(regions),
    ])

    assert result.exit_code == 0, result.output
    report = json.loads(result.stdout)
    assert report["sizing"]["feasibility"] == "Needs Adjustments"
    assert report["wcag"]["level"] == "A"


def test_invalid_regions_json(screenshot, tmp_path):
    regions = tmp_path / "regions.json"
    regions.write_text("{not json")

    result = CliRunner().invoke(cli.main, ["analyze", str(screenshot), "--no-ai", "--regions", str(regions)])

    assert result.exit_code == 2


def test_malformed_regions_exit_one(screenshot, tmp_path):
    regions = tmp_path / "regions.json"
    regions.write_text(json.dumps([{"element": "x"}]))

    result = CliRunner().invoke(cli.main, ["analyze", str(screenshot), "--no-ai", "--regions", str(regions)])

    assert result.exit_code == 1


def test_image_or_url_required():
    result = CliRunner().invoke(cli.main, ["analyze", "--no-ai"])

    assert result.exit_code == 2
    assert "IMAGE" in result.output


def test_non_image_file_fails(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")

    result = CliRunner().invoke(cli.main, ["analyze", str(notes), "--no-ai"])

    assert result.exit_code == 1


def test_rich_output_with_unavailable_provider(screenshot):
    result = CliRunner().invoke(cli.main, ["analyze", str(screenshot), "--provider", "gemini"])

    assert result.exit_code == 0, result.output
    assert "UI Quality Report" in result.stdout
    assert "degraded" in result.stdout


def test_design_systems_requires_provider(screenshot):
    result = CliRunner().invoke(cli.main, ["design-systems", str(screenshot), "--provider", "openai"])

    assert result.exit_code == 1


def test_regions_file_not_utf8(screenshot, tmp_path):
    regions = tmp_path / "regions.json"
    regions.write_bytes(b"\xff\xfe\x00[\x80]")

    result = CliRunner().invoke(cli.main, ["analyze", str(screenshot), "--no-ai", "--regions", str(regions)])

    assert result.exit_code == 2
    assert "UTF-8" in result.output
