"""
Unit Tests for comment / video analysis
"""

import pytest

from commentsense.domain.models import (
    EngagementLevel,
    RawComment,
    RawVideo,
    Sentiment,
)
from commentsense.services.analyzer import (
    analyze_comment,
    analyze_comment_with_video,
    analyze_video,
    video_context,
)


@pytest.fixture
def skincare_comment():
    return RawComment(
        comment_id="c1",
        video_id="v1",
        text_original="This product is amazing, best skincare serum ever! #1",
        like_count=15,
        published_at="2024-01-15T10:30:00",
    )


@pytest.fixture
def spam_comment():
    return RawComment(
        comment_id="c2",
        video_id="v1",
        text_original="dm me for free money now",
        like_count=0,
    )


@pytest.fixture
def video():
    return RawVideo(
        video_id="v1",
        title="Skincare Routine",
        view_count=1000,
        like_count=50,
        comment_count=2,
        topic_categories=["Beauty"],
    )


class TestAnalyzeComment:
    """Test per-comment analysis"""

    def test_positive_skincare_comment(self, skincare_comment):
        result = analyze_comment(skincare_comment)

        assert result.comment_id == "c1"
        assert result.sentiment == Sentiment.POSITIVE
        assert result.sentiment_score == 1.0
        assert result.category == "skincare"
        assert result.engagement == EngagementLevel.HIGH
        assert result.is_spam is False
        assert result.spam_score == 0.0
        assert result.is_quality is True
        assert result.quality_score == pytest.approx(0.85)
        # 0.75 * 0.4 + 0.85 * 0.3 + 1.0 * 0.3
        assert result.relevance_score == pytest.approx(0.855)
        assert result.keywords[:3] == ["skin", "skincare", "serum"]
        assert result.video is None

        print(f"\n✅ Comment analyzed: {result.category}, keywords={result.keywords}")

    def test_spam_comment(self, spam_comment):
        result = analyze_comment(spam_comment)

        assert result.is_spam is True
        assert result.spam_score == pytest.approx(0.7)
        assert result.engagement == EngagementLevel.LOW
        assert result.is_quality is False
        assert result.category == "general"

    def test_raw_fields_carried_over(self, skincare_comment):
        result = analyze_comment(skincare_comment)
        assert result.text_original == skincare_comment.text_original
        assert result.like_count == 15
        assert result.published_at == "2024-01-15T10:30:00"


class TestVideoJoin:
    """Test comment/video joins"""

    def test_join_attaches_context(self, skincare_comment, video):
        result = analyze_comment_with_video(skincare_comment, video)

        assert result.video is not None
        assert result.video.video_id == "v1"
        assert result.video.title == "Skincare Routine"
        assert result.video.view_count == 1000
        assert result.video.topic_categories == ["Beauty"]

    def test_no_video(self, skincare_comment):
        assert analyze_comment_with_video(skincare_comment, None).video is None

    def test_video_context(self, video):
        context = video_context(video)
        assert context.like_count == 50
        assert context.comment_count == 2


class TestAnalyzeVideo:
    """Test per-video analysis"""

    def test_rates_and_category(self, video):
        result = analyze_video(video)

        assert result.engagement_rate == pytest.approx(5.0)
        assert result.category == "skincare"
        assert result.title_sentiment == Sentiment.NEUTRAL
        assert result.description_sentiment == Sentiment.NEUTRAL
        # 0.04 + 0.015 + 0.006
        assert result.popularity_score == pytest.approx(0.061)
        assert result.content_quality == EngagementLevel.LOW

    def test_zero_views(self):
        result = analyze_video(RawVideo(video_id="v0", title="Empty", like_count=10))
        assert result.engagement_rate == 0.0
        assert result.content_quality == EngagementLevel.LOW

    @pytest.mark.parametrize(
        "likes,comments,expected",
        [
            (60, 51, EngagementLevel.HIGH),
            (60, 50, EngagementLevel.MEDIUM),
            (30, 11, EngagementLevel.MEDIUM),
            (30, 10, EngagementLevel.LOW),
        ],
    )
    def test_content_quality_tiers(self, likes, comments, expected):
        raw = RawVideo(
            video_id="v", title="t", view_count=1000, like_count=likes, comment_count=comments
        )
        assert analyze_video(raw).content_quality == expected

    def test_popularity_capped(self):
        raw = RawVideo(video_id="v", title="t", view_count=10**9)
        assert analyze_video(raw).popularity_score == 100.0
