"""
Configuration Management for CommentSense
Layered settings: defaults, optional YAML file, environment overrides
"""

import os
import yaml
import logging
import logging.handlers
import threading
from pathlib import Path
from typing import Dict, Any, Optional, List
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ============================================================================
# Core Configuration Classes
# ============================================================================


class APIConfig(BaseSettings):
    """API Server Configuration"""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=8000, description="API port")
    prefix: str = Field(default="/api/v1", description="API prefix")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        description="CORS allowed origins (comma-separated)",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class LoggingConfig(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (console only when unset)"
    )


class IngestionSettings(BaseSettings):
    """Upload / file ingestion configuration"""

    model_config = SettingsConfigDict(env_prefix="INGEST_")

    max_file_size_mb: float = Field(default=50, description="Max upload size (MB)")
    allowed_extensions: str = Field(
        default=".csv,.tsv,.txt",
        description="Accepted file extensions (comma-separated, empty = any)",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of uploads")

    @property
    def allowed_extensions_list(self) -> List[str]:
        """Normalized extension list (lower-case, leading dot)"""
        extensions = []
        for ext in self.allowed_extensions.split(","):
            ext = ext.strip().lower()
            if ext:
                extensions.append(ext if ext.startswith(".") else f".{ext}")
        return extensions

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_max_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("max_file_size_mb must be positive")
        return v


class AnalysisSettings(BaseSettings):
    """Analysis pipeline configuration"""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    batch_size: int = Field(
        default=50, description="Comments per progress-logging batch"
    )
    top_keywords_limit: int = Field(default=20, description="Size of keyword table")
    top_videos_limit: int = Field(
        default=5, description="Size of top-performing video list"
    )
    comment_preview_limit: int = Field(
        default=50, description="Default number of comments returned by the API"
    )


class ExportSettings(BaseSettings):
    """CSV export configuration"""

    model_config = SettingsConfigDict(env_prefix="EXPORT_")

    filename: str = Field(
        default="advanced-comment-analysis.csv", description="Download file name"
    )
    score_precision: int = Field(default=3, description="Decimals for score columns")


class FeaturesConfig(BaseSettings):
    """Feature Flags Configuration"""

    model_config = SettingsConfigDict(env_prefix="FEATURE_")

    enable_assistant: bool = Field(default=True, description="Enable chat assistant")
    enable_export: bool = Field(default=True, description="Enable CSV export")


class SessionSettings(BaseSettings):
    """In-memory analysis session configuration"""

    model_config = SettingsConfigDict(env_prefix="SESSION_")

    max_sessions: int = Field(default=20, description="Reports kept in memory")


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config:
    """
    Main Application Configuration
    Aggregates all configuration modules with unified access
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize application configuration

        Args:
            config_path: Optional YAML config file path
        """
        self.config_path = config_path or os.getenv(
            "COMMENTSENSE_CONFIG", "configs/app.yaml"
        )
        self.yaml_config = self._load_yaml_config()

        self.api = APIConfig()
        self.logging = LoggingConfig()
        self.ingestion = IngestionSettings()
        self.analysis = AnalysisSettings()
        self.export = ExportSettings()
        self.features = FeaturesConfig()
        self.session = SessionSettings()

    def _load_yaml_config(self) -> Dict[str, Any]:
        """Load YAML configuration file"""
        config_file = Path(self.config_path)

        if not config_file.exists():
            logger.warning(f"Config file not found: {config_file}, using defaults")
            return {}

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config: {e}")
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot notation key"""
        keys = key.split(".")
        value = self.yaml_config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def to_dict(self) -> Dict[str, Any]:
        """Export full configuration as dictionary"""
        return {
            "api": self.api.model_dump(),
            "logging": self.logging.model_dump(),
            "ingestion": self.ingestion.model_dump(),
            "analysis": self.analysis.model_dump(),
            "export": self.export.model_dump(),
            "features": self.features.model_dump(),
            "session": self.session.model_dump(),
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration summary"""
        return {
            "app": self.yaml_config.get("app", {}),
            "features": {
                "assistant": self.features.enable_assistant,
                "export": self.features.enable_export,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "prefix": self.api.prefix,
                "debug": self.api.debug,
            },
            "ingestion": {
                "max_file_size_mb": self.ingestion.max_file_size_mb,
                "allowed_extensions": self.ingestion.allowed_extensions_list,
            },
            "analysis": {
                "batch_size": self.analysis.batch_size,
                "top_keywords_limit": self.analysis.top_keywords_limit,
                "top_videos_limit": self.analysis.top_videos_limit,
            },
            "session": {
                "max_sessions": self.session.max_sessions,
            },
        }


# ============================================================================
# Global Configuration Instance (Singleton)
# ============================================================================

_config: Optional[Config] = None
_config_lock = threading.Lock()


@lru_cache()
def get_config(config_path: Optional[str] = None) -> Config:
    """
    Get or create global configuration instance (Thread-safe singleton)

    Args:
        config_path: Optional path to config file

    Returns:
        Config instance
    """
    global _config

    if _config is None:
        with _config_lock:
            if _config is None:
                _config = Config(config_path)
                logger.info("✅ Configuration initialized")

    return _config


def reload_config(config_path: Optional[str] = None) -> Config:
    """
    Force reload configuration

    Args:
        config_path: Optional new config path

    Returns:
        New Config instance
    """
    global _config

    with _config_lock:
        get_config.cache_clear()
        _config = Config(config_path)
        logger.info("🔄 Configuration reloaded")

    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)"""
    global _config

    with _config_lock:
        get_config.cache_clear()
        _config = None
        logger.info("🗑️ Configuration reset")


# ============================================================================
# Configuration Validation
# ============================================================================


def validate_config(config: Optional[Config] = None) -> Dict[str, Any]:
    """
    Validate configuration

    Args:
        config: Config instance (uses global if None)

    Returns:
        Validation result with errors and warnings
    """
    if config is None:
        config = get_config()

    errors = []
    warnings = []

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        errors.append(f"Unknown log level: {config.logging.level}")

    if config.logging.file_path:
        log_path = Path(config.logging.file_path)
        if not log_path.parent.exists():
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                errors.append(f"Cannot create log directory: {e}")

    if config.analysis.batch_size <= 0:
        errors.append("analysis.batch_size must be positive")
    if config.analysis.top_keywords_limit <= 0:
        errors.append("analysis.top_keywords_limit must be positive")
    if config.analysis.top_videos_limit <= 0:
        errors.append("analysis.top_videos_limit must be positive")

    if config.session.max_sessions <= 0:
        errors.append("session.max_sessions must be positive")

    if config.export.score_precision < 0:
        errors.append("export.score_precision must not be negative")

    if not config.ingestion.allowed_extensions_list:
        warnings.append("No allowed extensions configured - any file name is accepted")

    if not config.features.enable_export:
        warnings.append("CSV export is disabled")
    if not config.features.enable_assistant:
        warnings.append("Assistant is disabled")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


# ============================================================================
# Logging
# ============================================================================


def setup_logging(config: Optional[Config] = None) -> None:
    """
    Setup logging based on configuration

    Args:
        config: Config instance (uses global if None)
    """
    if config is None:
        config = get_config()

    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(config.logging.format))
    root_logger.addHandler(console_handler)

    # File handler (if specified)
    if config.logging.file_path:
        log_path = Path(config.logging.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(config.logging.format))
        root_logger.addHandler(file_handler)

    logger.info(f"📝 Logging configured: level={config.logging.level}")

