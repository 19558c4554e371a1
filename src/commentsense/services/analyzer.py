# src/commentsense/services/analyzer.py
"""
Record Analyzer
Runs every classifier over a cleaned record and attaches the verdicts.
"""

from typing import Optional

from commentsense.domain.models import (
    AnalyzedComment,
    AnalyzedVideo,
    EngagementLevel,
    RawComment,
    RawVideo,
    VideoContext,
)
from commentsense.services.classifiers import (
    analyze_sentiment,
    assess_quality,
    calculate_readability,
    categorize,
    detect_spam,
    engagement_level,
    extract_keywords,
)

RELEVANCE_WEIGHTS = {"category": 0.4, "quality": 0.3, "not_spam": 0.3}


def analyze_comment(raw: RawComment) -> AnalyzedComment:
    """Score one comment with every classifier"""
    text = raw.text_original
    sentiment = analyze_sentiment(text)
    category = categorize(text)
    spam = detect_spam(text)
    quality = assess_quality(text, raw.like_count)

    relevance = (
        category.confidence * RELEVANCE_WEIGHTS["category"]
        + quality.score * RELEVANCE_WEIGHTS["quality"]
        + (1 - spam.score) * RELEVANCE_WEIGHTS["not_spam"]
    )

    return AnalyzedComment(
        **raw.model_dump(),
        sentiment=sentiment.label,
        sentiment_score=sentiment.score,
        category=category.category,
        is_spam=spam.is_spam,
        spam_score=spam.score,
        is_quality=quality.is_quality,
        quality_score=quality.score,
        relevance_score=relevance,
        keywords=extract_keywords(text, category.category),
        engagement=engagement_level(raw.like_count),
        readability_score=calculate_readability(text),
    )


def video_context(video: RawVideo) -> VideoContext:
    """Subset of video metadata attached to joined comments"""
    return VideoContext(
        video_id=video.video_id,
        title=video.title,
        view_count=video.view_count,
        like_count=video.like_count,
        comment_count=video.comment_count,
        topic_categories=list(video.topic_categories),
    )


def analyze_comment_with_video(
    raw: RawComment, video: Optional[RawVideo] = None
) -> AnalyzedComment:
    """Analyze a comment and join its parent video when one is supplied"""
    analyzed = analyze_comment(raw)
    if video is None:
        return analyzed
    return analyzed.model_copy(update={"video": video_context(video)})


def analyze_video(raw: RawVideo) -> AnalyzedVideo:
    """
    Score one video

    Title and description sentiment are independent; category and
    keywords come from the combined text. Engagement rate is likes per
    view in percent.
    """
    combined = f"{raw.title} {raw.description}"
    title_sentiment = analyze_sentiment(raw.title)
    description_sentiment = analyze_sentiment(raw.description)
    category = categorize(combined)

    engagement_rate = (
        raw.like_count / raw.view_count * 100 if raw.view_count > 0 else 0.0
    )
    popularity = min(
        100.0,
        raw.view_count / 10000 * 0.4
        + raw.like_count / 1000 * 0.3
        + raw.comment_count / 100 * 0.3,
    )

    if engagement_rate > 5 and raw.comment_count > 50:
        content_quality = EngagementLevel.HIGH
    elif engagement_rate > 2 and raw.comment_count > 10:
        content_quality = EngagementLevel.MEDIUM
    else:
        content_quality = EngagementLevel.LOW

    return AnalyzedVideo(
        **raw.model_dump(),
        title_sentiment=title_sentiment.label,
        title_sentiment_score=title_sentiment.score,
        description_sentiment=description_sentiment.label,
        description_sentiment_score=description_sentiment.score,
        category=category.category,
        keywords=extract_keywords(combined, category.category),
        engagement_rate=engagement_rate,
        popularity_score=popularity,
        content_quality=content_quality,
    )
