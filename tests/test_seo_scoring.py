import pytest

from core.data_models import PageMetadata, PageStructure, ScoreBreakdown
from core.seo_scoring import (
    check_headings,
    check_images,
    check_meta_tags,
    check_mobile,
    check_performance,
    check_ssl,
    classify_health,
    overall_score,
    round_half_up,
)


GOOD_META = PageMetadata(
    title="T" * 55,
    description="D" * 155,
    og_image="https://example.com/og.png",
    canonical="https://example.com/",
)


def _run(check, subject):
    issues, recs = [], []
    score = check(subject, issues, recs)
    return score, issues, recs


# ---------------------------------------------------------------------------
# Meta tags
# ---------------------------------------------------------------------------
def test_meta_tags_perfect():
    score, issues, recs = _run(check_meta_tags, GOOD_META)
    assert score == 100
    assert issues == []
    assert recs == []


def test_meta_tags_everything_missing():
    score, issues, recs = _run(check_meta_tags, PageMetadata())
    assert score == 30
    assert [i.severity for i in issues] == ["critical", "critical", "warning", "info"]
    assert [i.category for i in issues] == ["Meta Tags", "Meta Tags", "Social Media", "Meta Tags"]
    assert issues[0].message == "Missing page title"
    assert issues[0].element == "<title>"
    assert recs == [
        "Add a descriptive title tag (50-60 characters)",
        "Add a meta description (150-160 characters)",
        "Add Open Graph meta tags for better social media sharing",
    ]


@pytest.mark.parametrize("length", [10, 29, 61, 90])
def test_meta_tags_title_length_out_of_range(length):
    meta = GOOD_META.model_copy(update={"title": "T" * length})
    score, issues, recs = _run(check_meta_tags, meta)
    assert score == 90
    assert len(issues) == 1
    assert issues[0].severity == "warning"
    assert f"Title length ({length})" in issues[0].message
    # no recommendation for a badly sized title
    assert recs == []


@pytest.mark.parametrize("length", [30, 60])
def test_meta_tags_title_length_bounds_inclusive(length):
    meta = GOOD_META.model_copy(update={"title": "T" * length})
    assert _run(check_meta_tags, meta)[0] == 100


@pytest.mark.parametrize("length,expected", [(119, 90), (120, 100), (160, 100), (161, 90)])
def test_meta_tags_description_length(length, expected):
    meta = GOOD_META.model_copy(update={"description": "D" * length})
    assert _run(check_meta_tags, meta)[0] == expected


# ---------------------------------------------------------------------------
# Headings / images
# ---------------------------------------------------------------------------
def test_headings_missing_h1_and_h2():
    score, issues, recs = _run(check_headings, PageStructure())
    assert score == 60
    assert [i.severity for i in issues] == ["critical", "info"]
    assert recs[0] == "Add one H1 heading per page with main keyword"
    assert len(recs) == 2


def test_headings_multiple_h1():
    score, issues, _ = _run(check_headings, PageStructure(h1_count=3, h2_count=1))
    assert score == 80
    assert issues[0].severity == "warning"
    assert "(3)" in issues[0].message


def test_headings_single_h1_with_h2():
    score, issues, recs = _run(check_headings, PageStructure(h1_count=1, h2_count=4))
    assert (score, issues, recs) == (100, [], [])


def test_images_missing_alt():
    score, issues, recs = _run(check_images, PageStructure(image_count=5, images_missing_alt=2))
    assert score == 80
    assert issues[0].message == "2 images missing alt text"
    assert len(recs) == 1


def test_images_all_have_alt():
    assert _run(check_images, PageStructure(image_count=5))[0] == 100


# ---------------------------------------------------------------------------
# SSL / mobile / performance
# ---------------------------------------------------------------------------
def test_ssl_https_and_http():
    assert _run(check_ssl, "https://example.com")[0] == 100

    score, issues, recs = _run(check_ssl, "http://example.com")
    assert score == 0
    assert issues[0].severity == "critical"
    assert issues[0].category == "Security"
    assert issues[0].message == "Website is not using HTTPS"
    assert recs == ["Enable HTTPS with SSL certificate for security and SEO"]


def test_mobile_viewport():
    assert _run(check_mobile, PageStructure(has_viewport=True))[0] == 100

    score, issues, _ = _run(check_mobile, PageStructure(has_viewport=False))
    assert score == 50
    assert issues[0].severity == "critical"


def test_mobile_responsive_hints_do_not_change_score():
    with_hints = _run(check_mobile, PageStructure(has_viewport=False, has_responsive_hints=True))
    without = _run(check_mobile, PageStructure(has_viewport=False, has_responsive_hints=False))
    assert with_hints[0] == without[0] == 50
    assert len(with_hints[1]) == len(without[1])


def test_performance_all_penalties():
    structure = PageStructure(inline_scripts=4, style_blocks=3, external_scripts=2)
    score, issues, recs = _run(check_performance, structure)
    assert score == 55
    assert [i.severity for i in issues] == ["warning", "info", "warning"]
    assert issues[0].message.startswith("4 inline scripts found")
    assert issues[1].message.startswith("3 inline style blocks found")
    # the style-block finding has no recommendation
    assert len(recs) == 2


def test_performance_thresholds_are_exclusive():
    structure = PageStructure(inline_scripts=3, style_blocks=2)
    assert _run(check_performance, structure)[0] == 100


def test_performance_deferred_external_script_ok():
    structure = PageStructure(external_scripts=3, async_or_defer_scripts=1)
    assert _run(check_performance, structure)[0] == 100


# ---------------------------------------------------------------------------
# Aggregation / health
# ---------------------------------------------------------------------------
def test_overall_score_is_unweighted_mean():
    breakdown = ScoreBreakdown(meta_tags=30, headings=60, images=100, performance=100, mobile=50, ssl=0)
    assert overall_score(breakdown) == 57


def test_overall_score_rounds_half_up():
    # 555 / 6 == 92.5
    breakdown = ScoreBreakdown(meta_tags=75, headings=100, images=80, performance=100, mobile=100, ssl=100)
    assert overall_score(breakdown) == 93


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(0) == 0


@pytest.mark.parametrize(
    "score,status",
    [
        (100, "excellent"),
        (90, "excellent"),
        (89, "good"),
        (75, "good"),
        (74, "fair"),
        (60, "fair"),
        (59, "poor"),
        (0, "poor"),
    ],
)
def test_classify_health_boundaries(score, status):
    assert classify_health(score) == status
