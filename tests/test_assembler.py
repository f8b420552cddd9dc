import json

import pytest

from conftest import FakeError, FakeProvider, full_response, region
from screen_audit.assembler import ReportAssembler
from screen_audit.client import GenerativeClient
from screen_audit.errors import HeuristicInputError
from screen_audit.models import Config


def _assembler(config, sleeper, script):
    provider = FakeProvider(script)
    return ReportAssembler(config, GenerativeClient(provider, config, sleep=sleeper)), provider


@pytest.mark.asyncio
async def test_heuristics_only_report(image, config):
    assembler = ReportAssembler(config)
    regions = [region("Save", 0, 0, 30, 30), region("Cancel", 100, 0, 200, 50)]

    report = await assembler.assemble(image, regions=regions)

    assert report.generative is None
    assert report.generative_status == "disabled"
    assert report.sizing.feasibility == "Needs Adjustments"
    assert report.contrast.light_mode == []
    assert report.wcag.level == "A"
    assert report.overall_score.breakdown["contrast"] == 0


@pytest.mark.asyncio
async def test_empty_regions_are_legitimate(image, config):
    report = await ReportAssembler(config).assemble(image)

    assert report.wcag is None
    assert report.overall_score.breakdown == {
        "wcag": 50,
        "contrast": 0,
        "typography": 50,
        "hierarchy": 50,
        "sizing": 90,
    }
    assert report.overall_score.score == 48


@pytest.mark.asyncio
async def test_ai_palette_feeds_contrast(image, config, sleeper, good_text):
    assembler, provider = _assembler(config, sleeper, [good_text])

    report = await assembler.assemble(image, use_generative=True)

    assert report.generative_status == "ok"
    assert report.generative.ui_type == "Dashboard"
    assert [(p.foreground, p.background) for p in report.contrast.light_mode] == [("#202124", "#FFFFFF")]
    assert report.overall_score.breakdown["contrast"] == 100
    assert report.wcag.level == "AAA"
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_rate_limited_ai_is_reported_not_raised(image, config, sleeper):
    assembler, _ = _assembler(config, sleeper, [FakeError("quota", status_code=429)] * 3)

    report = await assembler.assemble(image, use_generative=True)

    assert report.generative_status == "rate_limited"
    assert report.generative.overall_quality == 0
    assert report.contrast.light_mode == []


@pytest.mark.asyncio
async def test_unparseable_ai_degrades(image, config, sleeper):
    assembler, _ = _assembler(config, sleeper, ["no json here"])

    report = await assembler.assemble(image, use_generative=True)

    assert report.generative_status == "degraded"
    assert report.generative.overall_quality == 50


@pytest.mark.asyncio
async def test_ai_requested_without_client_degrades(image, config):
    report = await ReportAssembler(config).assemble(image, use_generative=True)

    assert report.generative_status == "degraded"
    assert report.generative is not None


@pytest.mark.asyncio
async def test_ai_score_does_not_change_overall(image, config, sleeper):
    low = json.dumps(full_response(overallQuality=5))
    high = json.dumps(full_response(overallQuality=95))

    first, _ = _assembler(config, sleeper, [low])
    second, _ = _assembler(config, sleeper, [high])

    assert (await first.assemble(image, use_generative=True)).overall_score == \
        (await second.assemble(image, use_generative=True)).overall_score


@pytest.mark.asyncio
async def test_malformed_regions_raise(image, config, sleeper, good_text):
    assembler, provider = _assembler(config, sleeper, [good_text])

    with pytest.raises(HeuristicInputError):
        await assembler.assemble(image, use_generative=True, regions=[{"element": "x"}])

    assert provider.calls == []


def test_from_config_without_key_has_no_client():
    assembler = ReportAssembler.from_config(Config(vision_provider="gemini"))
    assert assembler.client is None


def test_from_config_unknown_provider_has_no_client(config):
    assert ReportAssembler.from_config(config, "mystery").client is None
