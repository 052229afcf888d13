"""Periodic job recomputing hot scores.

Run from cron or a scheduler:

    duk-refresh-hot            # all approved posts
    duk-refresh-hot --post 42  # a single post
"""
from __future__ import annotations

import argparse
import logging
import sys

from duk_scoring.core.errors import ScoringError
from duk_scoring.core.settings import settings
from duk_scoring.db.session import SessionLocal
from duk_scoring.models.content import ContentKind, ContentRef
from duk_scoring.services.hot_score import refresh_hot_score, refresh_hot_scores

logger = logging.getLogger("duk_scoring.refresh_hot")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recompute time-decayed hot scores.")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--post", type=int, help="Refresh a single post by id.")
    target.add_argument("--comment", type=int, help="Refresh a single comment by id.")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    db = SessionLocal()
    try:
        if args.post is not None or args.comment is not None:
            ref = (
                ContentRef(ContentKind.POST, args.post)
                if args.post is not None
                else ContentRef(ContentKind.COMMENT, args.comment)
            )
            score = refresh_hot_score(db, ref)
            logger.info("Hot score for %s is now %.6f", ref, score)
        else:
            refresh_hot_scores(db)
    except ScoringError as exc:
        logger.error("Hot score refresh failed: %s", exc)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
