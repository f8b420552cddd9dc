import itertools

from conftest import region
from screen_audit.checks import analyze_keyboard, group_rows, score_hierarchy, score_typography
from screen_audit.checks.keyboard import MISSING_FOCUS_MESSAGE
from screen_audit.checks.regions import coerce_regions
from screen_audit.checks.sizing import analyze_sizing


def test_empty_regions_warn_without_failing():
    report = analyze_keyboard([])

    assert report.focus_order == []
    assert report.missing_labels == []
    assert report.focus_visibility is True
    assert report.pass_or_warn == "warn"


def test_tab_order_follows_reading_order():
    regions = [
        region("Footer", 0, 500, 100, 550),
        region("Search", 300, 10, 400, 60),
        region("Logo", 0, 30, 100, 80),
    ]
    report = analyze_keyboard(regions)

    assert [(f.element, f.tab_index) for f in report.focus_order] == [
        ("Logo", 1),
        ("Search", 2),
        ("Footer", 3),
    ]
    assert report.pass_or_warn == "pass"


def test_dense_screen_reports_missing_focus():
    regions = [region(f"link{i}", i * 60, 0, i * 60 + 50, 50) for i in range(6)]
    report = analyze_keyboard(regions)

    assert report.missing_labels == [MISSING_FOCUS_MESSAGE]
    assert report.focus_visibility is False
    assert report.pass_or_warn == "warn"
    assert len(report.interactive_elements) == 6


def test_five_regions_is_still_a_pass():
    regions = [region(f"link{i}", i * 60, 0, i * 60 + 50, 50) for i in range(5)]
    assert analyze_keyboard(regions).pass_or_warn == "pass"


def test_group_rows_uses_fifty_pixel_band():
    regions = coerce_regions([
        region("B", 200, 40, 250, 90),
        region("A", 0, 0, 50, 50),
        region("C", 0, 120, 50, 170),
    ])
    rows = group_rows(regions)

    assert [[r.element for r in row] for row in rows] == [["A", "B"], ["C"]]


def test_hierarchy_unmeasured_without_focus_order():
    report = score_hierarchy(analyze_keyboard([]))

    assert report.priority_score == 50
    assert report.rows == 0


def test_hierarchy_penalises_missing_focus():
    regions = [region(f"link{i}", i * 60, 0, i * 60 + 50, 50) for i in range(6)]
    report = score_hierarchy(analyze_keyboard(regions), rows=1)

    assert report.priority_score == 75
    assert report.rows == 1


def test_typography_unmeasured_without_font_hints():
    report = score_typography(analyze_sizing([region("A", 0, 0, 50, 50)]))

    assert report.readability_score == 50
    assert report.issues == []


def test_typography_penalises_small_text():
    regions = [
        region("Caption", 0, 0, 100, 50, font_size=12),
        region("Legal", 0, 100, 100, 150, font_size=11),
        region("Body", 0, 200, 100, 250, font_size=16),
    ]
    report = score_typography(analyze_sizing(regions))

    assert report.readability_score == 60
    assert report.issues == [
        '"Caption" uses 12px text (16px recommended)',
        '"Legal" uses 11px text (16px recommended)',
    ]


def test_typography_score_never_negative():
    regions = [region(f"t{i}", 0, i * 100, 100, i * 100 + 50, font_size=10) for i in range(7)]
    assert score_typography(analyze_sizing(regions)).readability_score == 0


def test_tab_order_is_independent_of_input_order():
    regions = [
        region("A", 200, 0, 250, 50),
        region("B", 100, 40, 150, 90),
        region("C", 0, 80, 50, 130),
    ]

    orders = {
        tuple(f.element for f in analyze_keyboard(list(permutation)).focus_order)
        for permutation in itertools.permutations(regions)
    }

    assert orders == {("B", "A", "C")}


def test_rows_start_from_the_topmost_region():
    regions = coerce_regions([
        region("C", 0, 80, 50, 130),
        region("B", 100, 40, 150, 90),
        region("A", 200, 0, 250, 50),
    ])

    assert [[r.element for r in row] for row in group_rows(regions)] == [["B", "A"], ["C"]]


def test_region_far_below_never_precedes_one_above():
    regions = [region("Low", 0, 120, 50, 170), region("High", 500, 0, 550, 50)]
    order = [f.element for f in analyze_keyboard(regions).focus_order]

    assert order == ["High", "Low"]
