# tests/services/test_votes.py
"""Tests for vote ledger maintenance and net score recomputation."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from duk_scoring.core.errors import NotFoundError, ValidationError
from duk_scoring.models import Vote
from duk_scoring.models.content import ContentKind, ContentRef
from duk_scoring.services.votes import VoteAggregator, count_net_score, resolve_target


@pytest.fixture()
def aggregator() -> VoteAggregator:
    return VoteAggregator()


def _vote_rows(db: Session, ref: ContentRef) -> int:
    return db.execute(
        select(func.count(Vote.id)).where(
            Vote.target_kind == ref.kind.value, Vote.target_id == ref.id
        )
    ).scalar_one()


def test_score_equals_ups_minus_downs_after_replay(
    db_session: Session, aggregator: VoteAggregator, test_post, now
) -> None:
    ref = ContentRef(ContentKind.POST, test_post.id)
    sequence = [
        ("alice", "up"),
        ("bob", "down"),
        ("carol", "up"),
        ("alice", "down"),
        ("carol", None),
        ("dave", "up"),
        ("erin", "up"),
    ]
    score = None
    for voter, polarity in sequence:
        score = aggregator.apply_vote(db_session, voter, ref, polarity, now=now)

    # alice down, bob down, dave up, erin up
    assert score == 0
    assert test_post.vote_score == 0
    assert count_net_score(db_session, ref) == 0
    assert _vote_rows(db_session, ref) == 4


def test_repeated_vote_is_idempotent(
    db_session: Session, aggregator: VoteAggregator, test_post, now
) -> None:
    ref = ContentRef(ContentKind.POST, test_post.id)
    assert aggregator.apply_vote(db_session, "alice", ref, "up", now=now) == 1
    assert aggregator.apply_vote(db_session, "alice", ref, "up", now=now) == 1
    assert _vote_rows(db_session, ref) == 1


def test_changing_polarity_swings_by_two(
    db_session: Session, aggregator: VoteAggregator, test_post, now
) -> None:
    ref = ContentRef(ContentKind.POST, test_post.id)
    aggregator.apply_vote(db_session, "alice", ref, "up", now=now)
    assert aggregator.apply_vote(db_session, "alice", ref, "down", now=now) == -1
    assert aggregator.get_vote(db_session, "alice", ref) == "down"


def test_clearing_removes_the_row(
    db_session: Session, aggregator: VoteAggregator, test_post, now
) -> None:
    ref = ContentRef(ContentKind.POST, test_post.id)
    aggregator.apply_vote(db_session, "alice", ref, "up", now=now)
    assert aggregator.apply_vote(db_session, "alice", ref, None, now=now) == 0
    assert aggregator.get_vote(db_session, "alice", ref) is None
    assert _vote_rows(db_session, ref) == 0


def test_clearing_without_a_vote_is_a_no_op(
    db_session: Session, aggregator: VoteAggregator, test_post, now
) -> None:
    ref = ContentRef(ContentKind.POST, test_post.id)
    assert aggregator.apply_vote(db_session, "alice", ref, None, now=now) == 0


def test_vote_refreshes_hot_score(
    db_session: Session, aggregator: VoteAggregator, test_post, now
) -> None:
    ref = ContentRef(ContentKind.POST, test_post.id)
    aggregator.apply_vote(db_session, "alice", ref, "up", now=now)
    assert test_post.hot_score > 0
    assert test_post.updated_at == now


def test_post_and_comment_ledgers_are_separate(
    db_session: Session, aggregator: VoteAggregator, test_post, make_comment, now
) -> None:
    comment = make_comment()
    post_ref = ContentRef(ContentKind.POST, test_post.id)
    comment_ref = ContentRef(ContentKind.COMMENT, comment.id)

    aggregator.apply_vote(db_session, "alice", post_ref, "up", now=now)
    assert aggregator.apply_vote(db_session, "alice", comment_ref, "down", now=now) == -1
    assert count_net_score(db_session, post_ref) == 1
    assert comment.vote_score == -1


def test_unapproved_comment_cannot_be_voted_on(
    db_session: Session, aggregator: VoteAggregator, make_comment
) -> None:
    comment = make_comment(approved=False)
    with pytest.raises(NotFoundError):
        aggregator.apply_vote(db_session, "alice", ContentRef("comment", comment.id), "up")


def test_removed_post_cannot_be_voted_on(
    db_session: Session, aggregator: VoteAggregator, make_post
) -> None:
    post = make_post(removed=True)
    with pytest.raises(NotFoundError):
        aggregator.apply_vote(db_session, "alice", ContentRef("post", post.id), "up")


def test_missing_target_raises_not_found(db_session: Session, aggregator: VoteAggregator) -> None:
    with pytest.raises(NotFoundError):
        aggregator.apply_vote(db_session, "alice", ContentRef("post", 424242), "up")


def test_invalid_polarity_is_rejected(
    db_session: Session, aggregator: VoteAggregator, test_post
) -> None:
    with pytest.raises(ValidationError):
        aggregator.apply_vote(db_session, "alice", ContentRef("post", test_post.id), "sideways")


def test_blank_voter_is_rejected(db_session: Session, aggregator: VoteAggregator, test_post) -> None:
    with pytest.raises(ValidationError):
        aggregator.apply_vote(db_session, "", ContentRef("post", test_post.id), "up")


def test_resolve_target() -> None:
    assert resolve_target("comment", 3) == ContentRef(ContentKind.COMMENT, 3)
    with pytest.raises(ValidationError):
        resolve_target("thread", 3)
    with pytest.raises(ValidationError):
        resolve_target(None, 3)
