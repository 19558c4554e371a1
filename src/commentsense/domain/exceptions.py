# src/commentsense/domain/exceptions.py
"""
Exception hierarchy for CommentSense
Shared by the parser, the services and the API layer
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for all CommentSense errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ============================================================================
# Resource / Validation Errors
# ============================================================================


class ResourceNotFoundError(ServiceError):
    """Requested resource does not exist"""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ValidationError(ServiceError):
    """Invalid input supplied by the caller"""


class FeatureDisabledError(ServiceError):
    """Feature switched off in configuration"""

    def __init__(self, feature: str):
        super().__init__(f"Feature disabled: {feature}", {"feature": feature})
        self.feature = feature


# ============================================================================
# Ingestion Errors (file-level)
# ============================================================================


class IngestionError(ServiceError):
    """File could not be turned into typed records"""


class EmptyInputError(IngestionError):
    """Content has no header + data rows"""


class UnsupportedFileError(IngestionError):
    """Wrong extension, too large or not decodable"""


class SchemaDetectionError(IngestionError):
    """Header matches neither the comment nor the video signature"""


class NoValidRowsError(IngestionError):
    """Every row was dropped by parsing or cleaning"""


# ============================================================================
# Processing Errors
# ============================================================================


class ProcessingError(ServiceError):
    """Unexpected failure while processing data"""


class ConfigurationError(ServiceError):
    """Invalid configuration"""


# ============================================================================
# Utility Functions
# ============================================================================


def error_to_http_status(error: Exception) -> int:
    """Map an exception to an HTTP status code"""
    if isinstance(error, ResourceNotFoundError):
        return 404
    if isinstance(error, FeatureDisabledError):
        return 403
    if isinstance(error, (ValidationError, IngestionError)):
        return 422
    return 500
