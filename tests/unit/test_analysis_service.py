"""
Unit Tests for CommentAnalysisService
"""

import pytest
from unittest.mock import Mock

from commentsense.domain.models import CommentFilter, RawComment, RawVideo
from commentsense.infrastructure.exporter import EXPORT_HEADERS
from commentsense.services import (
    CommentAnalysisService,
    ProcessingError,
    ValidationError,
)


@pytest.fixture
def comments():
    return [
        RawComment(
            comment_id="c1",
            video_id="v1",
            text_original="This product is amazing, best skincare serum ever! #1",
            like_count=15,
        ),
        RawComment(
            comment_id="c2",
            video_id="v1",
            text_original="dm me for free money now",
        ),
        RawComment(
            comment_id="c3",
            video_id="v9",
            text_original="Terrible perfume, the scent gave me a headache.",
            like_count=3,
        ),
    ]


@pytest.fixture
def videos():
    return [
        RawVideo(video_id="v1", title="Old title", view_count=10),
        RawVideo(video_id="v1", title="Skincare Routine", view_count=1000, like_count=50),
    ]


@pytest.fixture
def service():
    config = Mock()
    config.analysis.batch_size = 2
    config.analysis.top_keywords_limit = 3
    config.analysis.top_videos_limit = 1
    config.export.score_precision = 2
    return CommentAnalysisService(config=config)


@pytest.fixture
def report(service, comments, videos):
    return service.analyze(comments, videos)


class TestAnalyze:
    """Test the analysis pipeline"""

    def test_analyze_report(self, report):
        assert [c.comment_id for c in report.comments] == ["c1", "c2", "c3"]
        assert len(report.videos) == 2
        assert report.metrics.total_comments == 3
        assert report.metrics.total_videos == 2
        assert len(report.metrics.top_keywords) <= 3
        assert len(report.metrics.video_metrics.top_performing_videos) == 1

        print(f"\n✅ Report: {report.metrics.total_comments} comments")

    def test_join_uses_last_video_row(self, report):
        joined = report.comments[0].video
        assert joined is not None
        assert joined.title == "Skincare Routine"

    def test_unmatched_comment_has_no_video(self, report):
        assert report.comments[2].video is None

    def test_comments_only(self, service, comments):
        report = service.analyze(comments)
        assert report.videos == []
        assert report.metrics.video_metrics is None

    def test_defaults_without_config(self):
        service = CommentAnalysisService()
        assert service.batch_size == 50
        assert service.top_keywords_limit == 20
        assert service.score_precision == 3

    def test_bad_batch_size(self, service, comments):
        service.batch_size = 0
        with pytest.raises(ValidationError):
            service.analyze(comments)

    def test_unexpected_failure_wrapped(self, service, comments, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(
            "commentsense.services.analysis_service.generate_metrics", broken
        )
        with pytest.raises(ProcessingError) as exc_info:
            service.analyze(comments)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.details["operation"] == "analyze"


class TestFilterAndExport:
    """Test comment filtering and export"""

    def test_no_criteria_returns_all(self, service, report):
        assert len(service.filter_comments(report.comments)) == 3

    def test_search_matches_text(self, service, report):
        selected = service.filter_comments(report.comments, CommentFilter(search="MONEY"))
        assert [c.comment_id for c in selected] == ["c2"]

    def test_category_and_sentiment(self, service, report):
        selected = service.filter_comments(
            report.comments, CommentFilter(category="fragrance", sentiment="negative")
        )
        assert [c.comment_id for c in selected] == ["c3"]

    def test_spam_and_quality(self, service, report):
        spam = service.filter_comments(report.comments, CommentFilter(spam="spam"))
        clean = service.filter_comments(report.comments, CommentFilter(spam="clean"))
        quality = service.filter_comments(report.comments, CommentFilter(quality="quality"))
        low = service.filter_comments(report.comments, CommentFilter(quality="low-quality"))

        assert [c.comment_id for c in spam] == ["c2"]
        assert len(spam) + len(clean) == 3
        assert len(quality) + len(low) == 3
        assert "c1" in [c.comment_id for c in quality]

    @pytest.mark.parametrize("criteria", [CommentFilter(spam="maybe"), CommentFilter(quality="meh")])
    def test_invalid_filter(self, service, report, criteria):
        with pytest.raises(ValidationError):
            service.filter_comments(report.comments, criteria)

    def test_export_filtered(self, service, report):
        document = service.export(report.comments, CommentFilter(spam="spam"))
        lines = document.split("\n")

        assert lines[0] == ",".join(EXPORT_HEADERS)
        assert len(lines) == 2
        assert lines[1].startswith("c2,")
        assert ",0.70," in lines[1]

    def test_category_insights(self, service, report):
        insights = service.category_insights(report.comments)
        by_name = {i.category: i for i in insights}

        assert by_name["skincare"].total_comments == 1
        assert by_name["fragrance"].total_comments == 1
        assert by_name["general"].total_comments == 1
