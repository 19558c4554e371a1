# src/commentsense/services/cleaner.py
"""
Data Cleaner
Turns normalized string rows into typed records, dropping rows without
identifiers and repairing recoverable anomalies in place.
"""

import logging
import re
from collections import Counter
from typing import Iterable, List, Tuple

from commentsense.domain.models import (
    CleaningStats,
    CommentRow,
    RawComment,
    RawVideo,
    VideoRow,
)
from commentsense.infrastructure.timestamps import is_valid_date

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_count(value: str) -> int:
    """
    Parse the leading integer of a counter field

    "42" -> 42, "12.9" -> 12, "7 views" -> 7; anything unparseable or
    negative becomes 0.
    """
    match = _LEADING_INT.match(value or "")
    if not match:
        return 0
    return max(0, int(match.group(1)))


def split_pipe_list(value: str) -> List[str]:
    """Split a ``|``-delimited list, trimming items and dropping empties"""
    return [item.strip() for item in (value or "").split("|") if item.strip()]


def _build_stats(original: int, cleaned: int, drops: Counter, repairs: Counter) -> CleaningStats:
    removed = sum(drops.values())
    rate = round(removed / original * 100, 1) if original else 0.0
    return CleaningStats(
        original_count=original,
        cleaned_count=cleaned,
        removed_count=removed,
        drop_reasons=dict(drops),
        repairs=dict(repairs),
        cleaning_rate=rate,
    )


def _checked_date(value: str, repairs: Counter) -> str:
    if value and not is_valid_date(value):
        repairs["invalid_dates"] += 1
        return ""
    return value


# ============================================================================
# Comments
# ============================================================================


def clean_comments(rows: Iterable[CommentRow]) -> Tuple[List[RawComment], CleaningStats]:
    """
    Clean normalized comment rows

    Rows missing video_id, comment_id or text are dropped (first failing
    check is the one counted). Invalid publish dates are blanked.

    Returns:
        (cleaned comments, cleaning stats)
    """
    rows = list(rows)
    drops: Counter = Counter({"null_video_ids": 0, "null_comment_ids": 0, "null_texts": 0})
    repairs: Counter = Counter({"invalid_dates": 0})
    cleaned: List[RawComment] = []

    for row in rows:
        if not row.video_id.strip():
            drops["null_video_ids"] += 1
            continue
        if not row.comment_id.strip():
            drops["null_comment_ids"] += 1
            continue
        if not row.text_original.strip():
            drops["null_texts"] += 1
            continue

        cleaned.append(
            RawComment(
                kind=row.kind,
                comment_id=row.comment_id,
                channel_id=row.channel_id,
                video_id=row.video_id,
                author_id=row.author_id or "unknown",
                text_original=row.text_original.strip(),
                parent_comment_id=row.parent_comment_id,
                like_count=parse_count(row.like_count),
                published_at=_checked_date(row.published_at, repairs),
                updated_at=row.updated_at,
            )
        )

    stats = _build_stats(len(rows), len(cleaned), drops, repairs)
    logger.info(
        f"🧹 Comment cleaning: {stats.cleaned_count}/{stats.original_count} kept, "
        f"{stats.removed_count} removed ({stats.cleaning_rate}%), "
        f"reasons={stats.drop_reasons}, repairs={stats.repairs}"
    )
    return cleaned, stats


# ============================================================================
# Videos
# ============================================================================


def clean_videos(rows: Iterable[VideoRow]) -> Tuple[List[RawVideo], CleaningStats]:
    """
    Clean normalized video rows

    Rows missing video_id or title are dropped. Counters become
    non-negative ints; a non-empty view count that cleans to 0 is tallied
    as ``invalid_metrics``. Tags and topic categories are split on ``|``.

    Returns:
        (cleaned videos, cleaning stats)
    """
    rows = list(rows)
    drops: Counter = Counter({"null_video_ids": 0, "null_titles": 0})
    repairs: Counter = Counter({"invalid_dates": 0, "invalid_metrics": 0})
    cleaned: List[RawVideo] = []

    for row in rows:
        if not row.video_id.strip():
            drops["null_video_ids"] += 1
            continue
        if not row.title.strip():
            drops["null_titles"] += 1
            continue

        view_count = parse_count(row.view_count)
        if row.view_count and view_count == 0:
            repairs["invalid_metrics"] += 1

        cleaned.append(
            RawVideo(
                kind=row.kind,
                video_id=row.video_id,
                published_at=_checked_date(row.published_at, repairs),
                channel_id=row.channel_id,
                title=row.title.strip(),
                description=row.description,
                tags=split_pipe_list(row.tags),
                default_language=row.default_language or "en",
                default_audio_language=row.default_audio_language or "en",
                content_duration=row.content_duration,
                view_count=view_count,
                like_count=parse_count(row.like_count),
                favourite_count=parse_count(row.favourite_count),
                comment_count=parse_count(row.comment_count),
                topic_categories=split_pipe_list(row.topic_categories),
            )
        )

    stats = _build_stats(len(rows), len(cleaned), drops, repairs)
    logger.info(
        f"🧹 Video cleaning: {stats.cleaned_count}/{stats.original_count} kept, "
        f"{stats.removed_count} removed ({stats.cleaning_rate}%), "
        f"reasons={stats.drop_reasons}, repairs={stats.repairs}"
    )
    return cleaned, stats
