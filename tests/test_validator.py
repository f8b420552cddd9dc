import pytest

from conftest import full_response
from screen_audit.errors import SchemaError
from screen_audit.validator import (
    ARRAY_FIELDS,
    REQUIRED_FIELDS,
    SCORE_FIELDS,
    degraded_report,
    rate_limited_report,
    validate,
)


def test_well_formed_response_is_kept():
    report = validate(full_response())

    assert report.ui_type == "Dashboard"
    assert report.strengths == ["Clear navigation", "Consistent spacing"]
    assert report.overall_quality == 78
    assert report.color_palette.text == ["#202124"]


def test_there_are_fifteen_required_fields():
    assert len(REQUIRED_FIELDS) == 15
    assert len(set(REQUIRED_FIELDS)) == 15


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_missing_required_field_raises(field):
    data = full_response()
    del data[field]

    with pytest.raises(SchemaError) as info:
        validate(data)

    assert info.value.missing == [field]


def test_missing_key_raises_even_when_other_fields_are_garbage():
    data = full_response(overallQuality="high", strengths="many")
    del data["uiType"]

    with pytest.raises(SchemaError):
        validate(data)


def test_non_object_raises():
    with pytest.raises(SchemaError):
        validate(["not", "an", "object"])


@pytest.mark.parametrize("field", ARRAY_FIELDS)
@pytest.mark.parametrize("bad", ["a string", None, 3, {"k": "v"}])
def test_array_fields_coerced_to_empty(field, bad):
    report = validate(full_response(**{field: bad}))
    dumped = report.model_dump(by_alias=True)

    assert dumped[field] == []


def test_non_string_array_items_are_dropped():
    report = validate(full_response(strengths=["Good", 3, None, "Clean"]))
    assert report.strengths == ["Good", "Clean"]


@pytest.mark.parametrize("field", SCORE_FIELDS)
@pytest.mark.parametrize("bad", [-1, 101, 250.5, "90", None, True, float("nan"), [80]])
def test_scores_coerced_to_fifty(field, bad):
    report = validate(full_response(**{field: bad}))
    dumped = report.model_dump(by_alias=True)

    assert dumped[field] == 50


@pytest.mark.parametrize("score", [0, 100, 42.5])
def test_boundary_scores_are_kept(score):
    report = validate(full_response(contrastScore=score))
    assert report.contrast_score == score


@pytest.mark.parametrize("bad", [None, "#fff", ["#fff"], 7])
def test_malformed_palette_becomes_empty_buckets(bad):
    report = validate(full_response(colorPalette=bad))
    palette = report.color_palette

    assert palette.primary == palette.secondary == palette.accent == []
    assert palette.text == palette.background == []


def test_palette_buckets_are_coerced_individually():
    report = validate(full_response(colorPalette={"primary": "#000", "text": ["#111", 5]}))

    assert report.color_palette.primary == []
    assert report.color_palette.text == ["#111"]
    assert report.color_palette.background == []


def test_string_fields_are_coerced():
    report = validate(full_response(uiType=None, designSystem=["x"], targetAudienceMatch=12))

    assert report.ui_type == "Unknown"
    assert report.design_system == "Custom"
    assert report.target_audience_match == "12"


def test_everything_malformed_still_yields_complete_report():
    data = {field: None for field in REQUIRED_FIELDS}
    report = validate(data)

    for field in SCORE_FIELDS:
        assert 0 <= report.model_dump(by_alias=True)[field] <= 100
    assert report.recommendations == []


def test_rate_limited_report_signals_zero():
    report = rate_limited_report()

    assert report.overall_quality == 0
    assert report.contrast_score == 0
    assert report.wcag_compliance_score == 0
    assert "Rate Limit" in report.ui_type
    assert all(not bucket for bucket in report.color_palette.model_dump().values())


def test_degraded_report_signals_fifty():
    report = degraded_report()

    assert (report.overall_quality, report.contrast_score, report.wcag_compliance_score) == (50, 50, 50)
    assert "AI analysis unavailable" in report.weaknesses
    assert all(not bucket for bucket in report.color_palette.model_dump().values())
