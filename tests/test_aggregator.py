import pytest
from pydantic import ValidationError

from screen_audit.aggregator import (
    aggregate,
    contrast_score,
    overall_score,
    round_half_up,
    score_label,
    wcag_score,
)
from screen_audit.models import (
    CATEGORIES,
    AuditSignals,
    ContrastPair,
    ContrastPasses,
    ContrastReport,
    HierarchyReport,
    KeyboardReport,
    OverallScore,
    SizingReport,
    TypographyReport,
    WcagReport,
)


def _pair(aa: bool) -> ContrastPair:
    return ContrastPair(
        foreground="#000000" if aa else "#AAAAAA",
        background="#FFFFFF",
        ratio=21.0 if aa else 2.32,
        passes=ContrastPasses(aa=aa, aaa=aa),
    )


def _signals(
    wcag="AA",
    pairs=(True,),
    readability=70,
    priority=80,
    feasibility="Possible",
) -> AuditSignals:
    return AuditSignals(
        sizing=SizingReport(feasibility=feasibility),
        keyboard=KeyboardReport(),
        contrast=ContrastReport(light_mode=[_pair(aa) for aa in pairs]),
        typography=TypographyReport(readability_score=readability),
        hierarchy=HierarchyReport(priority_score=priority),
        wcag=WcagReport(level=wcag) if wcag else None,
    )


def test_reference_example_scores_good():
    result = overall_score(_signals())

    assert result.breakdown == {
        "wcag": 85,
        "contrast": 100,
        "typography": 70,
        "hierarchy": 80,
        "sizing": 90,
    }
    assert result.score == 85
    assert result.label == "Good"


def test_breakdown_keys_in_fixed_order():
    assert tuple(overall_score(_signals()).breakdown) == CATEGORIES


@pytest.mark.parametrize("level, expected", [("AAA", 100), ("AA", 85), ("A", 50), (None, 50)])
def test_wcag_level_mapping(level, expected):
    assert wcag_score(WcagReport(level=level) if level else None) == expected


def test_no_contrast_pairs_scores_zero():
    assert contrast_score(ContrastReport()) == 0


def test_contrast_percentage_rounds_half_up():
    # 1 of 8 passing is 12.5%
    report = ContrastReport(light_mode=[_pair(True)] + [_pair(False)] * 7)
    assert contrast_score(report) == 13


def test_needs_adjustments_sizing():
    assert overall_score(_signals(feasibility="Needs Adjustments")).breakdown["sizing"] == 65


@pytest.mark.parametrize("value, label", [
    (100, "Excellent"),
    (90, "Excellent"),
    (89, "Good"),
    (75, "Good"),
    (74, "Fair"),
    (60, "Fair"),
    (59, "Poor"),
    (0, "Poor"),
])
def test_label_thresholds(value, label):
    assert score_label(value) == label


@pytest.mark.parametrize("value, expected", [(84.5, 85), (84.4, 84), (0.5, 1), (2.5, 3)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_overall_rounds_half_up():
    # (50 + 0 + 50 + 50 + 65) / 5 = 43
    result = overall_score(_signals(wcag=None, pairs=(), readability=50, priority=50,
                                    feasibility="Needs Adjustments"))
    assert result.score == 43
    assert result.label == "Poor"


def test_aggregation_is_deterministic():
    signals = _signals()
    first = aggregate(signals)
    second = aggregate(signals)

    assert first.overall_score == second.overall_score


def test_aggregate_carries_generative_status():
    report = aggregate(_signals())

    assert report.generative is None
    assert report.generative_status == "disabled"
    assert "Overall: 85/100 (Good)" in report.summary()


def test_breakdown_must_cover_every_category():
    with pytest.raises(ValidationError):
        OverallScore(score=80, label="Good", breakdown={"wcag": 80})


def test_wire_format_is_camel_case():
    dumped = aggregate(_signals()).model_dump(mode="json", by_alias=True)

    assert set(dumped["overallScore"]) == {"score", "label", "breakdown"}
    assert dumped["sizing"]["feasibility"] == "Possible"
    assert "passOrWarn" in dumped["keyboard"]
    assert dumped["generativeStatus"] == "disabled"
