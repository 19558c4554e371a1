"""
Services Package
Business logic layer for CommentSense
"""

from .base_service import BaseService
from .ingestion_service import IngestionService
from .analysis_service import CommentAnalysisService
from .assistant import ScriptedAssistant
from .session_store import AnalysisSessionStore
from commentsense.domain.exceptions import (
    # Base
    ServiceError,

    # Resource Errors
    ResourceNotFoundError,

    # Validation Errors
    ValidationError,
    FeatureDisabledError,

    # Ingestion Errors
    IngestionError,
    EmptyInputError,
    UnsupportedFileError,
    SchemaDetectionError,
    NoValidRowsError,

    # Processing Errors
    ProcessingError,

    # Configuration Errors
    ConfigurationError,

    # Utility Functions
    error_to_http_status,
)

__all__ = [
    # Base Classes
    "BaseService",

    # Services
    "IngestionService",
    "CommentAnalysisService",
    "ScriptedAssistant",
    "AnalysisSessionStore",

    # Base Exception
    "ServiceError",

    # Resource Errors
    "ResourceNotFoundError",

    # Validation Errors
    "ValidationError",
    "FeatureDisabledError",

    # Ingestion Errors
    "IngestionError",
    "EmptyInputError",
    "UnsupportedFileError",
    "SchemaDetectionError",
    "NoValidRowsError",

    # Processing Errors
    "ProcessingError",

    # Configuration Errors
    "ConfigurationError",

    # Utility Functions
    "error_to_http_status",
]
