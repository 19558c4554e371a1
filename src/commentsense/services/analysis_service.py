# src/commentsense/services/analysis_service.py
"""
Comment Analysis Service
Runs the analyzer over cleaned records, joins comments to their videos and
produces metrics, filtered views and CSV exports.
"""

from typing import Dict, List, Optional, Sequence

from commentsense.domain.exceptions import ValidationError
from commentsense.domain.models import (
    AnalysisReport,
    AnalyzedComment,
    CategoryInsight,
    CommentFilter,
    RawComment,
    RawVideo,
)
from commentsense.infrastructure.exporter import export_comments_csv
from commentsense.services.analyzer import analyze_comment_with_video, analyze_video
from commentsense.services.base_service import BaseService
from commentsense.services.metrics import category_insights as summarize_categories
from commentsense.services.metrics import generate_metrics

SPAM_FILTERS = ("all", "spam", "clean")
QUALITY_FILTERS = ("all", "quality", "low-quality")


class CommentAnalysisService(BaseService):
    """
    Analysis pipeline service

    Handles:
    - Video analysis and comment/video joins
    - Batched comment analysis (progress logging only)
    - Metrics generation with configured limits
    - Comment filtering and CSV export
    """

    def __init__(self, config=None):
        super().__init__(config=config)
        analysis = getattr(config, "analysis", None)
        export = getattr(config, "export", None)

        self.batch_size = analysis.batch_size if analysis else 50
        self.top_keywords_limit = analysis.top_keywords_limit if analysis else 20
        self.top_videos_limit = analysis.top_videos_limit if analysis else 5
        self.score_precision = export.score_precision if export else 3

    def get_service_name(self) -> str:
        return "analysis"

    # ========================================================================
    # Analysis
    # ========================================================================

    def analyze(
        self,
        comments: Sequence[RawComment],
        videos: Optional[Sequence[RawVideo]] = None,
    ) -> AnalysisReport:
        """
        Analyze a dataset

        Args:
            comments: Cleaned comments
            videos: Cleaned videos (optional)

        Returns:
            AnalysisReport with analyzed records and fresh metrics

        Raises:
            ValidationError: Non-positive batch size
            ProcessingError: Unexpected failure inside the pipeline
        """
        videos = list(videos or [])
        self.validate_positive(self.batch_size, "batch_size")
        self.log_info(f"Analyzing {len(comments)} comments and {len(videos)} videos")

        try:
            analyzed_videos = [analyze_video(video) for video in videos]

            # Last row wins on duplicate ids
            video_index: Dict[str, RawVideo] = {v.video_id: v for v in videos}

            analyzed_comments: List[AnalyzedComment] = []
            total = len(comments)
            for start in range(0, total, self.batch_size):
                batch = comments[start:start + self.batch_size]
                analyzed_comments.extend(
                    analyze_comment_with_video(comment, video_index.get(comment.video_id))
                    for comment in batch
                )
                self.log_debug(
                    f"Analyzed {len(analyzed_comments)}/{total} comments "
                    f"({len(analyzed_comments) / total * 100:.0f}%)"
                )

            joined = sum(1 for c in analyzed_comments if c.video is not None)
            metrics = generate_metrics(
                analyzed_comments,
                analyzed_videos,
                top_keywords_limit=self.top_keywords_limit,
                top_videos_limit=self.top_videos_limit,
            )
        except Exception as e:
            raise self.handle_error(
                e, "analyze", {"comments": len(comments), "videos": len(videos)}
            )

        self.log_info(
            f"✅ Analysis complete: {len(analyzed_comments)} comments "
            f"({joined} joined to videos), {len(analyzed_videos)} videos"
        )
        return AnalysisReport(
            comments=analyzed_comments, videos=analyzed_videos, metrics=metrics
        )

    def category_insights(self, comments: Sequence[AnalyzedComment]) -> List[CategoryInsight]:
        """Per-category summary of analyzed comments"""
        return summarize_categories(comments)

    # ========================================================================
    # Filtering & Export
    # ========================================================================

    def filter_comments(
        self,
        comments: Sequence[AnalyzedComment],
        criteria: Optional[CommentFilter] = None,
    ) -> List[AnalyzedComment]:
        """
        Filter analyzed comments

        Raises:
            ValidationError: Unknown spam or quality filter value
        """
        criteria = criteria or CommentFilter()
        if criteria.spam not in SPAM_FILTERS:
            raise self._bad_filter("spam", criteria.spam, SPAM_FILTERS)
        if criteria.quality not in QUALITY_FILTERS:
            raise self._bad_filter("quality", criteria.quality, QUALITY_FILTERS)

        return [c for c in comments if self._matches(c, criteria)]

    def export(
        self,
        comments: Sequence[AnalyzedComment],
        criteria: Optional[CommentFilter] = None,
    ) -> str:
        """Export the filtered comments as CSV text"""
        selected = self.filter_comments(comments, criteria)
        self.log_info(f"Exporting {len(selected)}/{len(comments)} comments")
        return export_comments_csv(selected, precision=self.score_precision)

    # ========================================================================
    # Helper Methods
    # ========================================================================

    @staticmethod
    def _matches(comment: AnalyzedComment, criteria: CommentFilter) -> bool:
        search = criteria.search.lower()
        if search and not (
            search in comment.text_original.lower()
            or any(search in keyword.lower() for keyword in comment.keywords)
        ):
            return False

        if criteria.category != "all" and comment.category != criteria.category:
            return False
        if criteria.sentiment != "all" and comment.sentiment.value != criteria.sentiment:
            return False

        if criteria.spam == "spam" and not comment.is_spam:
            return False
        if criteria.spam == "clean" and comment.is_spam:
            return False

        if criteria.quality == "quality" and not comment.is_quality:
            return False
        if criteria.quality == "low-quality" and comment.is_quality:
            return False

        return True

    def _bad_filter(self, name: str, value: str, allowed: Sequence[str]) -> ValidationError:
        return ValidationError(
            f"Invalid {name} filter: {value}",
            {"field": name, "allowed": list(allowed)},
        )
