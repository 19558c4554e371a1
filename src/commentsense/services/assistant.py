# src/commentsense/services/assistant.py
"""
Scripted Assistant
Deterministic keyword-driven answers about an analysis report.

No language model is involved: the question is lower-cased and matched
against an ordered list of branches; the first matching branch formats
an answer from the report's metrics.
"""

import logging
from collections import Counter
from typing import Callable, List, Sequence, Tuple

from commentsense.domain.models import AnalysisReport, EngagementLevel

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hi! I'm your CommentSense assistant. I can help you understand your "
    "comment and video analysis data. Ask me about sentiment, engagement, "
    "video performance, categories, quality metrics, or specific insights!"
)

HELP_MESSAGE = "\n".join(
    [
        "I can help you understand your comment and video data! Try asking about:",
        '• Sentiment analysis ("How\'s my sentiment?")',
        '• Comment quality ("What\'s my comment quality?")',
        '• Video performance ("Show me top performing videos")',
        '• Video engagement ("How\'s my video engagement?")',
        '• Popular topics ("What categories are trending?")',
        '• Engagement patterns ("When do I get most comments?")',
        '• Improvement suggestions ("How can I improve?")',
        '• Overall summary ("Give me an overview")',
    ]
)

TITLE_PREVIEW = 50


def _has(question: str, *words: str) -> bool:
    return any(word in question for word in words)


def _preview(title: str) -> str:
    return f"{title[:TITLE_PREVIEW]}..."


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


class ScriptedAssistant:
    """
    Question answering over one AnalysisReport

    Usage:
        assistant = ScriptedAssistant(report)
        assistant.respond("How's my sentiment?")
    """

    def __init__(self, report: AnalysisReport):
        self.report = report
        self.metrics = report.metrics
        self.video_metrics = report.metrics.video_metrics

        self._branches: List[Tuple[Callable[[str], bool], Callable[[str], str]]] = [
            (lambda q: _has(q, "video") and _has(q, "performance", "best", "top"),
             self._video_performance),
            (lambda q: _has(q, "video") and _has(q, "engagement"), self._video_engagement),
            (lambda q: _has(q, "video") and _has(q, "category", "topic"), self._video_categories),
            (lambda q: _has(q, "video") and _has(q, "view", "popular"), self._video_views),
            (lambda q: _has(q, "overall", "summary"), self._summary),
            (lambda q: _has(q, "sentiment"), self._sentiment),
            (lambda q: _has(q, "quality"), self._quality),
            (lambda q: _has(q, "spam"), self._spam),
            (lambda q: _has(q, "category", "topic"), self._categories),
            (lambda q: _has(q, "engagement"), self._engagement),
            (lambda q: _has(q, "keyword", "popular"), self._keywords),
            (lambda q: _has(q, "time", "when", "trend"), self._peak_hours),
            (lambda q: _has(q, "improve", "better", "suggestion"), self._suggestions),
        ]

    # ========================================================================
    # Public API
    # ========================================================================

    def respond(self, question: str) -> str:
        """Answer a free-text question"""
        text = (question or "").lower()
        for matches, answer in self._branches:
            if matches(text):
                response = answer(text)
                logger.debug(f"💬 {answer.__name__}: {question!r}")
                return response
        return HELP_MESSAGE

    def suggested_questions(self) -> List[str]:
        """Starter questions; video ones only when video metrics exist"""
        questions = ["How's my sentiment analysis?", "What's my comment quality?"]
        if self.video_metrics is not None:
            questions += ["Show me top performing videos", "How's my video engagement?"]
        questions += [
            "Show me popular keywords",
            "When do I get most engagement?",
            "How can I improve?",
        ]
        return questions

    # ========================================================================
    # Video branches
    # ========================================================================

    def _video_performance(self, question: str) -> str:
        if self.video_metrics is None or not self.report.videos:
            return (
                "No video data available. Upload a videos CSV file to get video "
                "performance insights!"
            )
        top = sorted(self.report.videos, key=lambda v: v.engagement_rate, reverse=True)[:3]
        listing = ", ".join(
            f'{i}. "{_preview(v.title)}" ({v.engagement_rate:.2f}% engagement)'
            for i, v in enumerate(top, start=1)
        )
        return (
            f"Top performing videos by engagement rate: {listing}. "
            "Focus on similar content styles for better performance."
        )

    def _video_engagement(self, question: str) -> str:
        if self.video_metrics is None:
            return (
                "No video data available. Upload a videos CSV file to analyze "
                "video engagement!"
            )
        rate = self.video_metrics.avg_engagement_rate
        verdict = (
            "Excellent engagement! Your videos are resonating well with viewers."
            if rate > 5
            else "Consider optimizing titles, thumbnails, and content to boost engagement."
        )
        return (
            f"Average video engagement rate: {rate:.2f}%. {verdict} "
            f"Total videos analyzed: {self.metrics.total_videos}."
        )

    def _video_categories(self, question: str) -> str:
        if self.video_metrics is None:
            return (
                "No video data available. Upload a videos CSV file to see video "
                "category insights!"
            )
        counts = Counter(v.category for v in self.report.videos)
        listing = ", ".join(f"{cat} ({count} videos)" for cat, count in counts.most_common(3))
        return (
            f"Top video categories: {listing}. "
            "These categories generate the most content in your channel."
        )

    def _video_views(self, question: str) -> str:
        videos = self.report.videos
        if not videos:
            return (
                "No video data available. Upload a videos CSV file to analyze "
                "video popularity!"
            )
        total_views = sum(v.view_count for v in videos)
        average = total_views / len(videos)
        most_viewed = max(videos, key=lambda v: v.view_count)
        return (
            f"Total views across all videos: {total_views:,}. "
            f"Average views per video: {_round_half_up(average):,}. "
            f'Most viewed: "{_preview(most_viewed.title)}" with '
            f"{most_viewed.view_count:,} views."
        )

    # ========================================================================
    # Comment branches
    # ========================================================================

    def _summary(self, question: str) -> str:
        m = self.metrics
        response = (
            f"Summary: {m.total_comments} comments analyzed. "
            f"Quality: {m.quality_ratio:.1f}%, "
            f"Positive sentiment: {m.sentiment_distribution.positive:.1f}%, "
            f"Spam: {m.spam_ratio:.1f}%."
        )
        if self.video_metrics is not None:
            response += (
                f" Videos: {m.total_videos} analyzed, "
                f"{self.video_metrics.avg_engagement_rate:.2f}% avg engagement rate."
            )
        if m.sentiment_distribution.positive > 50 and m.quality_ratio > 40:
            response += " Excellent community engagement!"
        else:
            response += " Good foundation with room for improvement."
        return response

    def _sentiment(self, question: str) -> str:
        dist = self.metrics.sentiment_distribution
        if "positive" in question:
            verdict = (
                "That's great! Your audience is responding positively."
                if dist.positive > 50
                else "Consider focusing on content that generates more positive engagement."
            )
            return f"Your content has {dist.positive:.1f}% positive sentiment. {verdict}"
        if "negative" in question:
            verdict = (
                "You might want to address concerns or improve content quality."
                if dist.negative > 30
                else "Your negative sentiment is within normal ranges."
            )
            return f"{dist.negative:.1f}% of comments show negative sentiment. {verdict}"
        verdict = (
            "Overall sentiment is positive!"
            if dist.positive > dist.negative
            else "Consider strategies to improve sentiment."
        )
        return (
            f"Your sentiment breakdown: {dist.positive:.1f}% positive, "
            f"{dist.neutral:.1f}% neutral, {dist.negative:.1f}% negative. {verdict}"
        )

    def _quality(self, question: str) -> str:
        ratio = self.metrics.quality_ratio
        count = sum(1 for c in self.report.comments if c.is_quality)
        verdict = (
            "Excellent engagement quality!"
            if ratio > 40
            else "Consider encouraging more detailed discussions."
        )
        return (
            f"{ratio:.1f}% of your comments are high-quality "
            f"({count} out of {self.metrics.total_comments}). {verdict}"
        )

    def _spam(self, question: str) -> str:
        ratio = self.metrics.spam_ratio
        count = sum(1 for c in self.report.comments if c.is_spam)
        verdict = (
            "Consider implementing stricter moderation."
            if ratio > 10
            else "Your spam levels are well-controlled."
        )
        return f"{ratio:.1f}% of comments were flagged as spam ({count} comments). {verdict}"

    def _categories(self, question: str) -> str:
        ranked = sorted(
            self.metrics.category_distribution.items(),
            key=lambda item: item[1],
            reverse=True,
        )[:3]
        listing = ", ".join(f"{cat} ({count} comments)" for cat, count in ranked)
        return (
            f"Top discussion categories: {listing}. "
            "This shows what topics resonate most with your audience."
        )

    def _engagement(self, question: str) -> str:
        average = self.metrics.average_engagement
        high = sum(1 for c in self.report.comments if c.engagement == EngagementLevel.HIGH)
        verdict = (
            "Great engagement levels!"
            if average > 5
            else "Consider strategies to boost interaction."
        )
        return (
            f"Average engagement is {average:.1f} likes per comment. "
            f"{high} comments have high engagement. {verdict}"
        )

    def _keywords(self, question: str) -> str:
        listing = ", ".join(
            f'"{k.keyword}" ({k.count} times)' for k in self.metrics.top_keywords[:5]
        )
        return (
            f"Most mentioned keywords: {listing}. "
            "These represent your audience's main interests."
        )

    def _peak_hours(self, question: str) -> str:
        peaks = sorted(
            self.metrics.engagement_trends, key=lambda h: h.comments, reverse=True
        )[:3]
        listing = ", ".join(f"{h.hour}:00 ({h.comments} comments)" for h in peaks)
        return (
            f"Peak activity hours: {listing}. "
            "Post content during these times for maximum engagement."
        )

    def _suggestions(self, question: str) -> str:
        suggestions = improvement_suggestions(self.report)
        if not suggestions:
            return (
                "Your metrics look great! Keep up the good work with your "
                "current content strategy."
            )
        return f"Based on your data, consider: {', '.join(suggestions)}."


def improvement_suggestions(report: AnalysisReport) -> Sequence[str]:
    """Actionable suggestions triggered by weak metrics"""
    m = report.metrics
    suggestions: List[str] = []
    if m.quality_ratio < 40:
        suggestions.append("encourage more detailed discussions")
    if m.sentiment_distribution.negative > 30:
        suggestions.append("address negative feedback proactively")
    if m.spam_ratio > 10:
        suggestions.append("implement stricter comment moderation")
    if m.average_engagement < 3:
        suggestions.append("create more engaging content")

    if m.video_metrics is not None and m.video_metrics.avg_engagement_rate < 3:
        suggestions.append("optimize video titles and thumbnails for better engagement")
    return suggestions
