"""
Service Dependency Injection
FastAPI dependency providers for services
"""

from functools import lru_cache

from commentsense.app.config import Config, get_config
from commentsense.services import (
    AnalysisSessionStore,
    CommentAnalysisService,
    IngestionService,
)


# ============================================================================
# Service Factories
# ============================================================================


def get_app_config() -> Config:
    """Dependency provider for the global configuration"""
    return get_config()


@lru_cache()
def get_session_store() -> AnalysisSessionStore:
    """
    Get or create the process-wide analysis session store (Singleton)

    Returns:
        AnalysisSessionStore sized from ``session.max_sessions``
    """
    config = get_config()
    return AnalysisSessionStore(max_sessions=config.session.max_sessions)


def get_ingestion_service() -> IngestionService:
    """
    Dependency provider for IngestionService

    Usage in FastAPI:
        @router.post("/upload")
        def upload(
            files: List[UploadFile],
            ingestion: IngestionService = Depends(get_ingestion_service),
        ):
            ...
    """
    return IngestionService(config=get_config())


def get_analysis_service() -> CommentAnalysisService:
    """Dependency provider for CommentAnalysisService"""
    return CommentAnalysisService(config=get_config())


def reset_dependencies() -> None:
    """Drop cached singletons (mainly for testing)"""
    get_session_store.cache_clear()
