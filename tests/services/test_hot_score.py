# tests/services/test_hot_score.py
"""Tests for time-decayed hot score ranking."""

from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from duk_scoring.core.errors import NotFoundError, ValidationError
from duk_scoring.models.content import ContentRef
from duk_scoring.services.hot_score import (
    calculate_hot_score,
    list_posts,
    refresh_hot_score,
    refresh_hot_scores,
)


def test_known_value(now) -> None:
    score = calculate_hot_score(10, 4, now - timedelta(hours=1), now)
    assert score == pytest.approx(12 / 3**1.8)


def test_identical_inputs_give_identical_scores(now) -> None:
    created = now - timedelta(hours=5)
    assert calculate_hot_score(7, 2, created, now) == calculate_hot_score(7, 2, created, now)


def test_score_decays_with_age(now) -> None:
    scores = [
        calculate_hot_score(10, 0, now - timedelta(hours=hours), now)
        for hours in (1, 2, 6, 24, 72)
    ]
    assert scores == sorted(scores, reverse=True)
    assert len(set(scores)) == len(scores)


def test_age_is_clamped_for_clock_skew(now) -> None:
    at_floor = calculate_hot_score(10, 0, now, now)
    from_future = calculate_hot_score(10, 0, now + timedelta(hours=3), now)
    assert at_floor == from_future == pytest.approx(10 / 2.1**1.8)


def test_negative_votes_rank_below_zero(now) -> None:
    assert calculate_hot_score(-3, 0, now - timedelta(hours=1), now) < 0


def test_naive_timestamps_are_treated_as_utc(now) -> None:
    naive = (now - timedelta(hours=1)).replace(tzinfo=None)
    assert calculate_hot_score(5, 0, naive, now) == calculate_hot_score(
        5, 0, now - timedelta(hours=1), now
    )


def test_refresh_single_item(db_session: Session, make_post, now) -> None:
    post = make_post(vote_score=5, created_at=now - timedelta(hours=2))
    score = refresh_hot_score(db_session, ContentRef("post", post.id), now=now)
    assert score == pytest.approx(5 / 4**1.8)
    assert post.hot_score == score


def test_refresh_missing_item(db_session: Session) -> None:
    with pytest.raises(NotFoundError):
        refresh_hot_score(db_session, ContentRef("post", 404))


def test_bulk_refresh_skips_hidden_posts(db_session: Session, make_post, now) -> None:
    visible = make_post(vote_score=3)
    pending = make_post(vote_score=3, approved=False)
    removed = make_post(vote_score=3, removed=True)

    assert refresh_hot_scores(db_session, now=now) == 1
    assert visible.hot_score > 0
    assert pending.hot_score == 0
    assert removed.hot_score == 0


def test_feed_sorts(db_session: Session, make_post, now) -> None:
    old_popular = make_post("old", vote_score=50, created_at=now - timedelta(days=3))
    fresh = make_post("fresh", vote_score=4, created_at=now - timedelta(minutes=30))
    make_post("hidden", approved=False, vote_score=100)
    refresh_hot_scores(db_session, now=now)

    assert [p.id for p in list_posts(db_session, "top")] == [old_popular.id, fresh.id]
    assert [p.id for p in list_posts(db_session, "new")] == [fresh.id, old_popular.id]
    assert [p.id for p in list_posts(db_session, "hot")] == [fresh.id, old_popular.id]


def test_feed_filters_by_community(db_session: Session, make_post, community) -> None:
    inside = make_post(community_id=community.id)
    make_post()
    assert [p.id for p in list_posts(db_session, "new", community_id=community.id)] == [inside.id]


def test_feed_rejects_unknown_sort(db_session: Session) -> None:
    with pytest.raises(ValidationError):
        list_posts(db_session, "rising")
