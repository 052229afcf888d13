# tests/services/test_trending.py
"""Tests for keyword extraction and the trending frequency table."""

from datetime import timedelta

from sqlalchemy.orm import Session

from duk_scoring.db.time import ensure_aware
from duk_scoring.services import trending


def test_extract_lowercases_and_strips_punctuation() -> None:
    assert trending.extract("The Quick Brown Fox!!", 5) == ["quick", "brown", "fox"]


def test_extract_length_bounds() -> None:
    assert trending.extract("an ant ants", 5) == ["ant", "ants"]
    nineteen = "a" * 19
    twenty = "b" * 20
    assert trending.extract(f"{nineteen} {twenty}", 5) == [nineteen]


def test_extract_respects_limit_and_order() -> None:
    text = "library printer broken again library printer queue"
    assert trending.extract(text, 3) == ["library", "printer", "broken"]
    assert trending.extract(text, 0) == []


def test_extract_keeps_repeated_tokens_in_the_first_n() -> None:
    assert trending.extract("exam exam schedule posted", 3) == ["exam", "exam", "schedule"]


def test_record_counts_repeats_within_one_text(db_session: Session, now) -> None:
    trending.record(db_session, "Exam tips for the exam", 5, now=now)

    frequencies = {row.topic: row.frequency for row in trending.list_trending(db_session)}
    assert frequencies == {"exam": 2, "tips": 1}


def test_upsert_increments_frequency(db_session: Session, now) -> None:
    later = now + timedelta(minutes=5)
    trending.upsert(db_session, "exam", now)
    trending.upsert(db_session, "exam", later)

    (row,) = trending.list_trending(db_session)
    assert row.topic == "exam"
    assert row.frequency == 2
    assert ensure_aware(row.last_updated) == later


def test_record_returns_recorded_topics(db_session: Session, now) -> None:
    assert trending.record(db_session, "Exam schedule posted", 5, now=now) == [
        "exam",
        "schedule",
        "posted",
    ]
    assert {row.topic for row in trending.list_trending(db_session)} == {
        "exam",
        "schedule",
        "posted",
    }


def test_list_orders_by_frequency_then_recency(db_session: Session, now) -> None:
    trending.record(db_session, "exam parking", 5, now=now)
    trending.record(db_session, "exam", 5, now=now + timedelta(minutes=1))
    trending.record(db_session, "cafeteria", 5, now=now + timedelta(minutes=2))

    topics = [row.topic for row in trending.list_trending(db_session)]
    assert topics == ["exam", "cafeteria", "parking"]


def test_list_window_excludes_stale_topics(db_session: Session, now) -> None:
    trending.record(db_session, "parking", 5, now=now - timedelta(days=2))
    trending.record(db_session, "exam", 5, now=now)

    recent = trending.list_trending(db_session, since=now - timedelta(hours=24))
    assert [row.topic for row in recent] == ["exam"]


def test_best_effort_record_commits(db_session: Session) -> None:
    assert trending.record_best_effort(db_session, "Registration opens tomorrow", 5) == [
        "registration",
        "opens",
        "tomorrow",
    ]
    assert len(trending.list_trending(db_session)) == 3
