# src/commentsense/domain/models.py
"""
Domain models for comment and video analysis.

Every record is an immutable pydantic model. Python code uses snake_case
field names; JSON / API output uses the camelCase names of the source files
(``commentId``, ``textOriginal``...) through the alias generator, so

    comment.model_dump(by_alias=True)

yields the shape the dashboard consumes.
"""
from __future__ import annotations

import enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    """Immutable base model with camelCase aliases"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# ============================================================================
# Enumerations
# ============================================================================


class Sentiment(str, enum.Enum):
    """Sentiment label"""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class EngagementLevel(str, enum.Enum):
    """Engagement tier (comments) and content quality tier (videos)"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FileType(str, enum.Enum):
    """Detected schema of an uploaded file"""

    COMMENTS = "comments"
    VIDEOS = "videos"
    UNKNOWN = "unknown"


class FileStatus(str, enum.Enum):
    """Outcome of processing one file"""

    SUCCESS = "success"
    ERROR = "error"


# ============================================================================
# Normalized rows (canonical names, string values)
# ============================================================================


class CommentRow(FrozenModel):
    """Comment row after header aliasing, before cleaning"""

    kind: str = "youtube#comment"
    comment_id: str = ""
    channel_id: str = ""
    video_id: str = ""
    author_id: str = ""
    text_original: str = ""
    parent_comment_id: str = ""
    like_count: str = "0"
    published_at: str = ""
    updated_at: str = ""


class VideoRow(FrozenModel):
    """Video row after header aliasing, before cleaning"""

    kind: str = "youtube#video"
    video_id: str = ""
    published_at: str = ""
    channel_id: str = ""
    title: str = ""
    description: str = ""
    tags: str = ""
    default_language: str = "en"
    default_audio_language: str = "en"
    content_duration: str = ""
    view_count: str = "0"
    like_count: str = "0"
    favourite_count: str = "0"
    comment_count: str = "0"
    topic_categories: str = ""


# ============================================================================
# Cleaned records
# ============================================================================


class RawComment(FrozenModel):
    """Cleaned comment: identifiers present, like count >= 0"""

    kind: str = "youtube#comment"
    comment_id: str
    channel_id: str = ""
    video_id: str
    author_id: str = "unknown"
    text_original: str
    parent_comment_id: str = ""
    like_count: int = Field(default=0, ge=0)
    published_at: str = ""
    updated_at: str = ""


class RawVideo(FrozenModel):
    """Cleaned video: identifiers present, counters >= 0"""

    kind: str = "youtube#video"
    video_id: str
    published_at: str = ""
    channel_id: str = ""
    title: str
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    default_language: str = "en"
    default_audio_language: str = "en"
    content_duration: str = ""
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    favourite_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    topic_categories: List[str] = Field(default_factory=list)


class CleaningStats(FrozenModel):
    """Report produced by the data cleaner"""

    original_count: int = 0
    cleaned_count: int = 0
    removed_count: int = 0
    drop_reasons: Dict[str, int] = Field(default_factory=dict)
    repairs: Dict[str, int] = Field(default_factory=dict)
    cleaning_rate: float = 0.0


# ============================================================================
# Classifier verdicts
# ============================================================================


class SentimentResult(FrozenModel):
    label: Sentiment
    score: float


class CategoryResult(FrozenModel):
    category: str
    confidence: float


class SpamResult(FrozenModel):
    is_spam: bool
    score: float
    reasons: List[str] = Field(default_factory=list)


class QualityResult(FrozenModel):
    is_quality: bool
    score: float
    factors: List[str] = Field(default_factory=list)


# ============================================================================
# Analyzed records
# ============================================================================


class VideoContext(FrozenModel):
    """Parent video metadata joined onto a comment"""

    video_id: str
    title: str
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    topic_categories: List[str] = Field(default_factory=list)


class AnalyzedComment(RawComment):
    """Comment with every classifier verdict attached"""

    sentiment: Sentiment
    sentiment_score: float
    category: str
    is_spam: bool
    spam_score: float
    is_quality: bool
    quality_score: float
    relevance_score: float
    keywords: List[str] = Field(default_factory=list)
    engagement: EngagementLevel
    readability_score: float
    video: Optional[VideoContext] = None


class AnalyzedVideo(RawVideo):
    """Video with title/description verdicts and performance scores"""

    title_sentiment: Sentiment
    title_sentiment_score: float
    description_sentiment: Sentiment
    description_sentiment_score: float
    category: str
    keywords: List[str] = Field(default_factory=list)
    engagement_rate: float
    popularity_score: float
    content_quality: EngagementLevel


# ============================================================================
# Aggregate metrics
# ============================================================================


class SentimentDistribution(FrozenModel):
    positive: float = 0.0
    negative: float = 0.0
    neutral: float = 0.0


class KeywordStat(FrozenModel):
    keyword: str
    count: int
    sentiment: Sentiment


class HourlyEngagement(FrozenModel):
    hour: int
    comments: int = 0
    avg_likes: float = 0.0


class TopVideo(FrozenModel):
    video_id: str
    title: str
    engagement_rate: float


class CategoryPerformance(FrozenModel):
    avg_views: float
    avg_engagement: float


class VideoMetrics(FrozenModel):
    """Video block of the metrics, present only when videos exist"""

    total_views: int
    total_likes: int
    total_favorites: int
    avg_view_count: float
    avg_like_count: float
    avg_favorite_count: float
    avg_comment_count: float
    avg_engagement_rate: float
    top_performing_videos: List[TopVideo] = Field(default_factory=list)
    category_performance: Dict[str, CategoryPerformance] = Field(default_factory=dict)


class QualityIndicators(FrozenModel):
    avg_length: float = 0.0
    avg_likes: float = 0.0
    avg_readability: float = 0.0


class AnalysisMetrics(FrozenModel):
    """Dataset-level snapshot, recomputed from scratch on every run"""

    total_comments: int = 0
    total_videos: int = 0
    quality_ratio: float = 0.0
    sentiment_distribution: SentimentDistribution = Field(
        default_factory=SentimentDistribution
    )
    category_distribution: Dict[str, int] = Field(default_factory=dict)
    spam_ratio: float = 0.0
    average_engagement: float = 0.0
    top_keywords: List[KeywordStat] = Field(default_factory=list)
    engagement_trends: List[HourlyEngagement] = Field(default_factory=list)
    quality_indicators: QualityIndicators = Field(default_factory=QualityIndicators)
    video_metrics: Optional[VideoMetrics] = None


class KeywordCount(FrozenModel):
    keyword: str
    count: int


class CategoryInsight(FrozenModel):
    """Per-category comment summary"""

    category: str
    total_comments: int
    keywords: List[KeywordCount] = Field(default_factory=list)
    avg_quality: float = 0.0
    avg_sentiment: float = 0.0


# ============================================================================
# Service-level containers
# ============================================================================


class FileProcessingResult(FrozenModel):
    """Per-file ingestion outcome; errors never abort sibling files"""

    filename: str
    file_type: FileType = FileType.UNKNOWN
    status: FileStatus
    message: str = ""
    delimiter: Optional[str] = None
    rows_parsed: int = 0
    skipped_lines: int = 0
    stats: Optional[CleaningStats] = None
    comments: List[RawComment] = Field(default_factory=list)
    videos: List[RawVideo] = Field(default_factory=list)


class IngestionBatch(FrozenModel):
    """Results of a multi-file upload"""

    results: List[FileProcessingResult] = Field(default_factory=list)
    comments: List[RawComment] = Field(default_factory=list)
    videos: List[RawVideo] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return any(r.status == FileStatus.SUCCESS for r in self.results)


class AnalysisReport(FrozenModel):
    """Everything the view layer needs for one analysis run"""

    comments: List[AnalyzedComment] = Field(default_factory=list)
    videos: List[AnalyzedVideo] = Field(default_factory=list)
    metrics: AnalysisMetrics = Field(default_factory=AnalysisMetrics)


class CommentFilter(FrozenModel):
    """Filter criteria for the comment table and the CSV export"""

    search: str = ""
    category: str = "all"
    sentiment: str = "all"
    spam: str = "all"
    quality: str = "all"
