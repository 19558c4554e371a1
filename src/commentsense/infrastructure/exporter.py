# src/commentsense/infrastructure/exporter.py
"""
CSV export of analyzed comments
"""

import logging
from typing import Iterable, List

from commentsense.domain.models import AnalyzedComment

logger = logging.getLogger(__name__)

EXPORT_HEADERS = (
    "Comment ID",
    "Text",
    "Sentiment",
    "Sentiment Score",
    "Category",
    "Quality Score",
    "Relevance Score",
    "Spam Score",
    "Is Quality",
    "Is Spam",
    "Engagement Level",
    "Readability Score",
    "Likes",
    "Keywords",
    "Published At",
)


def quote(value: str) -> str:
    """Wrap in double quotes, doubling inner quotes"""
    return '"' + value.replace('"', '""') + '"'


def escape(value: str, delimiter: str = ",") -> str:
    """Quote only when the value would otherwise break the record"""
    if delimiter in value or '"' in value or "\n" in value or "\r" in value:
        return quote(value)
    return value


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def export_row(comment: AnalyzedComment, precision: int = 3) -> str:
    """Render one comment as an export record"""
    score = f"{{:.{precision}f}}".format
    fields: List[str] = [
        escape(comment.comment_id),
        quote(comment.text_original),
        comment.sentiment.value,
        score(comment.sentiment_score),
        escape(comment.category),
        score(comment.quality_score),
        score(comment.relevance_score),
        score(comment.spam_score),
        _yes_no(comment.is_quality),
        _yes_no(comment.is_spam),
        comment.engagement.value,
        score(comment.readability_score),
        str(comment.like_count),
        quote(", ".join(comment.keywords)),
        escape(comment.published_at),
    ]
    return ",".join(fields)


def export_comments_csv(
    comments: Iterable[AnalyzedComment], precision: int = 3
) -> str:
    """
    Serialize analyzed comments to comma-separated text

    Args:
        comments: Comments to export, in output order
        precision: Decimal places for score columns

    Returns:
        Header line followed by one line per comment, newline-joined
    """
    lines = [",".join(EXPORT_HEADERS)]
    lines.extend(export_row(comment, precision) for comment in comments)
    logger.info(f"📤 Exported {len(lines) - 1} comments")
    return "\n".join(lines)
