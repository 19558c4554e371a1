# src/commentsense/services/base_service.py
"""
Base Service
Shared logging, validation and error wrapping for service classes
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from commentsense.domain.exceptions import (
    ProcessingError,
    ServiceError,
    ValidationError,
)


class BaseService(ABC):
    """
    Base class for all services

    Provides:
    - Service-scoped logger helpers
    - Input validation helpers raising ValidationError
    - Wrapping of unexpected exceptions into ProcessingError
    """

    def __init__(self, config=None):
        self.config = config
        self.logger = logging.getLogger(f"commentsense.services.{self.get_service_name()}")

    @abstractmethod
    def get_service_name(self) -> str:
        """Short service name used in log records"""

    # ========================================================================
    # Logging
    # ========================================================================

    def log_debug(self, message: str) -> None:
        self.logger.debug(f"[{self.get_service_name()}] {message}")

    def log_info(self, message: str) -> None:
        self.logger.info(f"[{self.get_service_name()}] {message}")

    def log_warning(self, message: str) -> None:
        self.logger.warning(f"[{self.get_service_name()}] {message}")

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        if error is not None:
            message = f"{message}: {error}"
        self.logger.error(f"[{self.get_service_name()}] {message}")

    # ========================================================================
    # Validation
    # ========================================================================

    def validate_positive(self, value: int, field_name: str) -> None:
        """Raise ValidationError unless value > 0"""
        if value is None or value <= 0:
            raise ValidationError(
                f"{field_name} must be positive", {"field": field_name, "value": value}
            )

    # ========================================================================
    # Error handling
    # ========================================================================

    def handle_error(
        self,
        error: Exception,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ServiceError:
        """
        Convert an exception into a ServiceError to re-raise

        ServiceErrors pass through unchanged; anything else is logged and
        wrapped into ProcessingError.

        Usage:
            except Exception as e:
                raise self.handle_error(e, "analyze")
        """
        if isinstance(error, ServiceError):
            return error

        details = {"operation": operation, **(context or {})}
        self.log_error(f"Unexpected error during {operation}", error=error)
        wrapped = ProcessingError(f"{operation} failed: {error}", details)
        wrapped.__cause__ = error
        return wrapped
