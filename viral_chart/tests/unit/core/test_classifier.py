import pytest

from viral_chart.core.classifier import (
    classify,
    classify_period,
    compute_trending_threshold,
    period_threshold,
)


def test_classify_faller(make_entry):
    entry = make_entry(7, last_week=5)

    result = classify(entry)

    assert result.position_change == -2
    assert result.has_gains is False
    assert result.is_new is False
    assert result.is_trending is False


def test_classify_new_entry(make_entry):
    entry = make_entry(9, last_week=None)

    result = classify(entry)

    assert result.is_new is True
    assert result.position_change is None
    assert result.has_gains is False
    assert result.is_trending is True


def test_classify_hold_is_not_a_gain(make_entry):
    result = classify(make_entry(3, last_week=3))

    assert result.position_change == 0
    assert result.has_gains is False
    assert result.is_trending is False


def test_classify_climber_trends(make_entry):
    result = classify(make_entry(10, last_week=12))

    assert result.position_change == 2
    assert result.has_gains is True
    assert result.is_trending is True


def test_award_is_passed_through(make_entry):
    awarded = make_entry(1, last_week=1, is_award=True)
    plain = make_entry(2, last_week=2, is_award=False)

    assert classify(awarded).is_award is True
    assert classify(plain).is_award is False


def test_engagement_above_threshold_trends(make_entry):
    entry = make_entry(5, last_week=5, metrics={"likes": 900, "shares": 50, "comments": 50})

    assert classify(entry, trending_threshold=999).is_trending is True
    assert classify(entry, trending_threshold=1000).is_trending is False
    assert classify(entry).is_trending is False


def test_classify_reports_engagement(make_entry):
    entry = make_entry(5, last_week=5, metrics={"likes": 1000, "shares": 400, "comments": 100})

    result = classify(entry)

    assert result.engagement_total == 1500
    assert result.formatted_engagement == "1.5K"


def test_classify_without_metrics(make_entry):
    result = classify(make_entry(5, last_week=5))

    assert result.engagement_total is None
    assert result.formatted_engagement == ""


def test_classify_is_idempotent(make_entry):
    entry = make_entry(4, last_week=6, metrics={"likes": 10, "shares": 5, "comments": 1})

    assert classify(entry, 12.5) == classify(entry, 12.5)


def test_compute_trending_threshold_top_quartile():
    assert compute_trending_threshold([100, 200, 300, 400, 500]) == pytest.approx(400.0)


def test_compute_trending_threshold_empty():
    assert compute_trending_threshold([]) is None


def test_period_threshold_explicit_override(sample_feed):
    assert period_threshold(sample_feed.rankings, threshold=42) == 42.0


def test_classify_period(sample_feed):
    classified = classify_period(sample_feed.rankings)

    assert [e.position for e in classified] == [1, 2, 3, 4]

    leader, climber, faller, newcomer = classified
    assert leader.position_change == 0
    assert leader.is_award is True
    # Only the leader clears the top-quartile threshold on engagement.
    assert leader.is_trending is True
    assert leader.formatted_engagement == "2.1M"

    assert climber.position_change == 2
    assert climber.has_gains is True
    assert climber.is_trending is True

    assert faller.position_change == -1
    assert faller.is_trending is False

    assert newcomer.is_new is True
    assert newcomer.position_change is None
    assert newcomer.is_trending is True
    assert newcomer.creator == "creator4"


def test_classify_period_orders_by_position(make_entry):
    entries = [make_entry(3, last_week=1), make_entry(1, last_week=3), make_entry(2)]

    classified = classify_period(entries)

    assert [e.position for e in classified] == [1, 2, 3]


def test_classify_period_is_idempotent(sample_feed):
    assert classify_period(sample_feed.rankings) == classify_period(sample_feed.rankings)
