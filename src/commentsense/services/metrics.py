# src/commentsense/services/metrics.py
"""
Metrics Aggregator
Rolls analyzed comments and videos into dataset-level statistics.

Metrics are always recomputed from the full collections; nothing is
accumulated between calls.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence

from commentsense.domain.lexicon import INSIGHT_CATEGORIES
from commentsense.domain.models import (
    AnalysisMetrics,
    AnalyzedComment,
    AnalyzedVideo,
    CategoryInsight,
    CategoryPerformance,
    HourlyEngagement,
    KeywordCount,
    KeywordStat,
    QualityIndicators,
    Sentiment,
    SentimentDistribution,
    TopVideo,
    VideoMetrics,
)
from commentsense.infrastructure.timestamps import local_hour

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
DEFAULT_TOP_KEYWORDS = 20
DEFAULT_TOP_VIDEOS = 5
INSIGHT_KEYWORDS = 10


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percent(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


# ============================================================================
# Building blocks
# ============================================================================


def empty_trends() -> List[HourlyEngagement]:
    return [HourlyEngagement(hour=hour) for hour in range(HOURS_PER_DAY)]


def engagement_trends(comments: Sequence[AnalyzedComment]) -> List[HourlyEngagement]:
    """Comments and mean likes per local hour; unparseable dates are skipped"""
    counts = [0] * HOURS_PER_DAY
    likes = [0] * HOURS_PER_DAY

    for comment in comments:
        hour = local_hour(comment.published_at)
        if hour is None:
            continue
        counts[hour] += 1
        likes[hour] += comment.like_count

    return [
        HourlyEngagement(
            hour=hour,
            comments=counts[hour],
            avg_likes=likes[hour] / counts[hour] if counts[hour] else 0.0,
        )
        for hour in range(HOURS_PER_DAY)
    ]


def top_keywords(
    comments: Sequence[AnalyzedComment], limit: int = DEFAULT_TOP_KEYWORDS
) -> List[KeywordStat]:
    """
    Most frequent keywords across comments

    Each comment counts a keyword once. The attached sentiment is that of
    the first comment that introduced the keyword.
    """
    counts: Counter = Counter()
    first_sentiment: Dict[str, Sentiment] = {}

    for comment in comments:
        for keyword in dict.fromkeys(comment.keywords):
            counts[keyword] += 1
            first_sentiment.setdefault(keyword, comment.sentiment)

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        KeywordStat(keyword=keyword, count=count, sentiment=first_sentiment[keyword])
        for keyword, count in ranked[:limit]
    ]


def video_metrics(
    videos: Sequence[AnalyzedVideo], top_limit: int = DEFAULT_TOP_VIDEOS
) -> Optional[VideoMetrics]:
    """Totals, averages and rankings over analyzed videos; None when empty"""
    if not videos:
        return None

    total_views = sum(v.view_count for v in videos)
    total_likes = sum(v.like_count for v in videos)
    total_favorites = sum(v.favourite_count for v in videos)
    count = len(videos)

    ranked = sorted(videos, key=lambda v: v.engagement_rate, reverse=True)
    top_videos = [
        TopVideo(video_id=v.video_id, title=v.title, engagement_rate=v.engagement_rate)
        for v in ranked[:top_limit]
    ]

    grouped: Dict[str, List[AnalyzedVideo]] = {}
    for video in videos:
        grouped.setdefault(video.category, []).append(video)

    performance = {
        category: CategoryPerformance(
            avg_views=_mean([v.view_count for v in members]),
            avg_engagement=_mean([v.engagement_rate for v in members]),
        )
        for category, members in grouped.items()
    }

    return VideoMetrics(
        total_views=total_views,
        total_likes=total_likes,
        total_favorites=total_favorites,
        avg_view_count=total_views / count,
        avg_like_count=total_likes / count,
        avg_favorite_count=total_favorites / count,
        avg_comment_count=sum(v.comment_count for v in videos) / count,
        avg_engagement_rate=sum(v.engagement_rate for v in videos) / count,
        top_performing_videos=top_videos,
        category_performance=performance,
    )


# ============================================================================
# Public API
# ============================================================================


def generate_metrics(
    comments: Sequence[AnalyzedComment],
    videos: Optional[Sequence[AnalyzedVideo]] = None,
    top_keywords_limit: int = DEFAULT_TOP_KEYWORDS,
    top_videos_limit: int = DEFAULT_TOP_VIDEOS,
) -> AnalysisMetrics:
    """
    Generate dataset metrics

    Args:
        comments: Analyzed comments (may be empty)
        videos: Analyzed videos, optional
        top_keywords_limit: Size of the keyword table
        top_videos_limit: Size of the top-performing video list

    Returns:
        AnalysisMetrics; video_metrics is None when no videos were given
    """
    videos = list(videos or [])
    total = len(comments)
    video_block = video_metrics(videos, top_videos_limit)

    if total == 0:
        logger.info(f"📊 No comments to aggregate ({len(videos)} videos)")
        return AnalysisMetrics(
            total_videos=len(videos),
            engagement_trends=empty_trends(),
            video_metrics=video_block,
        )

    sentiments = Counter(c.sentiment for c in comments)
    categories = Counter(c.category for c in comments)
    total_likes = sum(c.like_count for c in comments)

    metrics = AnalysisMetrics(
        total_comments=total,
        total_videos=len(videos),
        quality_ratio=_percent(sum(1 for c in comments if c.is_quality), total),
        sentiment_distribution=SentimentDistribution(
            positive=_percent(sentiments[Sentiment.POSITIVE], total),
            negative=_percent(sentiments[Sentiment.NEGATIVE], total),
            neutral=_percent(sentiments[Sentiment.NEUTRAL], total),
        ),
        category_distribution=dict(categories),
        spam_ratio=_percent(sum(1 for c in comments if c.is_spam), total),
        average_engagement=total_likes / total,
        top_keywords=top_keywords(comments, top_keywords_limit),
        engagement_trends=engagement_trends(comments),
        quality_indicators=QualityIndicators(
            avg_length=_mean([len(c.text_original) for c in comments]),
            avg_likes=total_likes / total,
            avg_readability=_mean([c.readability_score for c in comments]),
        ),
        video_metrics=video_block,
    )

    logger.info(
        f"📊 Metrics generated: {total} comments, {len(videos)} videos, "
        f"quality={metrics.quality_ratio:.1f}%, spam={metrics.spam_ratio:.1f}%"
    )
    return metrics


def category_insights(comments: Sequence[AnalyzedComment]) -> List[CategoryInsight]:
    """Per-category keyword, quality and sentiment summary in fixed order"""
    insights: List[CategoryInsight] = []

    for category in INSIGHT_CATEGORIES:
        members = [c for c in comments if c.category == category]
        keyword_counts = Counter(k for c in members for k in c.keywords)
        ranked = sorted(keyword_counts.items(), key=lambda item: item[1], reverse=True)

        insights.append(
            CategoryInsight(
                category=category,
                total_comments=len(members),
                keywords=[
                    KeywordCount(keyword=keyword, count=count)
                    for keyword, count in ranked[:INSIGHT_KEYWORDS]
                ],
                avg_quality=_mean([c.quality_score for c in members]),
                avg_sentiment=_mean([c.sentiment_score for c in members]),
            )
        )

    return insights
