# src/commentsense/infrastructure/normalizer.py
"""
Record Normalizer
Maps parsed rows onto canonical comment / video field names and detects
which of the two schemas an uploaded file follows.
"""

import logging
from typing import Dict, Mapping, Optional, Sequence, Tuple

from commentsense.domain.models import CommentRow, FileType, VideoRow
from commentsense.infrastructure.csv_parser import (
    DELIMITERS,
    count_column_matches,
    split_line,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Schemas
# ============================================================================

COMMENT_COLUMNS = (
    "commentId",
    "textOriginal",
    "authorId",
    "likeCount",
    "publishedAt",
    "videoId",
    "channelId",
)

VIDEO_COLUMNS = (
    "videoId",
    "title",
    "description",
    "viewCount",
    "likeCount",
    "commentCount",
    "channelId",
)

COMMENT_SIGNATURE = ("commentid", "textoriginal", "authorid", "videoid")
VIDEO_SIGNATURE = ("videoid", "title", "description", "viewcount", "channelid")

SIGNATURE_THRESHOLD = 3

EXPECTED_COLUMNS: Dict[FileType, Tuple[str, ...]] = {
    FileType.COMMENTS: COMMENT_COLUMNS,
    FileType.VIDEOS: VIDEO_COLUMNS,
}

UNKNOWN_SCHEMA_MESSAGE = (
    "Unable to detect file type. Expected columns for comments: "
    "commentId, textOriginal, authorId, videoId. For videos: videoId, title, "
    "description, viewCount, channelId. Tried separators: comma, semicolon, "
    "pipe, tab."
)

# canonical field -> (aliases in lookup order, default)
_COMMENT_ALIASES: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "kind": (("kind",), "youtube#comment"),
    "comment_id": (("commentId", "comment_id"), ""),
    "channel_id": (("channelId", "channel_id"), ""),
    "video_id": (("videoId", "video_id"), ""),
    "author_id": (("authorId", "author_id"), ""),
    "text_original": (("textOriginal", "text_original", "text"), ""),
    "parent_comment_id": (("parentCommentId", "parent_comment_id"), ""),
    "like_count": (("likeCount", "like_count"), "0"),
    "published_at": (("publishedAt", "published_at"), ""),
    "updated_at": (("updatedAt", "updated_at"), ""),
}

_VIDEO_ALIASES: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "kind": (("kind",), "youtube#video"),
    "video_id": (("videoId", "video_id"), ""),
    "published_at": (("publishedAt", "published_at"), ""),
    "channel_id": (("channelId", "channel_id"), ""),
    "title": (("title",), ""),
    "description": (("description",), ""),
    "tags": (("tags",), ""),
    "default_language": (("defaultLanguage", "default_language"), "en"),
    "default_audio_language": (
        ("defaultAudioLanguage", "default_audio_language"),
        "en",
    ),
    "content_duration": (("contentDuration", "content_duration"), ""),
    "view_count": (("viewCount", "view_count"), "0"),
    "like_count": (("likeCount", "like_count"), "0"),
    "favourite_count": (("favouriteCount", "favourite_count"), "0"),
    "comment_count": (("commentCount", "comment_count"), "0"),
    "topic_categories": (("topicCategories",), ""),
}


def _lookup(row: Mapping[str, str], aliases: Sequence[str], default: str) -> str:
    """First non-empty value among the aliases, else the default"""
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return default


def _remap(row: Mapping[str, str], table) -> Dict[str, str]:
    return {
        field_name: _lookup(row, aliases, default)
        for field_name, (aliases, default) in table.items()
    }


# ============================================================================
# Normalization
# ============================================================================


def normalize_comment(row: Mapping[str, str]) -> CommentRow:
    """Map one parsed row onto the canonical comment fields"""
    return CommentRow(**_remap(row, _COMMENT_ALIASES))


def normalize_video(row: Mapping[str, str]) -> VideoRow:
    """Map one parsed row onto the canonical video fields"""
    return VideoRow(**_remap(row, _VIDEO_ALIASES))


# ============================================================================
# Schema detection
# ============================================================================


def detect_file_type(headers: Sequence[str]) -> FileType:
    """
    Detect the schema from parsed header tokens

    A schema qualifies with at least three signature matches. When both
    or neither qualify the result is UNKNOWN.
    """
    comment_score = count_column_matches(headers, COMMENT_SIGNATURE)
    video_score = count_column_matches(headers, VIDEO_SIGNATURE)

    is_comments = comment_score >= SIGNATURE_THRESHOLD
    is_videos = video_score >= SIGNATURE_THRESHOLD

    logger.debug(
        f"Schema scores: comments={comment_score}/{len(COMMENT_SIGNATURE)}, "
        f"videos={video_score}/{len(VIDEO_SIGNATURE)}"
    )

    if is_comments and not is_videos:
        return FileType.COMMENTS
    if is_videos and not is_comments:
        return FileType.VIDEOS
    return FileType.UNKNOWN


def detect_file_type_from_header(
    header_line: str,
) -> Tuple[FileType, Optional[str]]:
    """
    Try each delimiter in order and return the first conclusive detection

    Returns:
        (file_type, delimiter); delimiter is None when nothing matched
    """
    for delimiter in DELIMITERS:
        headers = split_line(header_line, delimiter)
        file_type = detect_file_type(headers)
        if file_type != FileType.UNKNOWN:
            return file_type, delimiter
    return FileType.UNKNOWN, None
