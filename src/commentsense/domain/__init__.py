# src/commentsense/domain/__init__.py
"""
Domain layer: immutable records, the heuristic keyword tables and the
exception hierarchy. Nothing here imports from the other layers.
"""
from .exceptions import (
    ServiceError,
    ValidationError,
    ResourceNotFoundError,
    IngestionError,
    EmptyInputError,
    SchemaDetectionError,
)
from .models import (
    AnalysisMetrics,
    AnalysisReport,
    AnalyzedComment,
    AnalyzedVideo,
    CommentRow,
    FileType,
    RawComment,
    RawVideo,
    Sentiment,
    VideoRow,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "ResourceNotFoundError",
    "IngestionError",
    "EmptyInputError",
    "SchemaDetectionError",
    "AnalysisMetrics",
    "AnalysisReport",
    "AnalyzedComment",
    "AnalyzedVideo",
    "CommentRow",
    "FileType",
    "RawComment",
    "RawVideo",
    "Sentiment",
    "VideoRow",
]
