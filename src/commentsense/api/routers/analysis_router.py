"""
Analysis API Router
REST endpoints for uploading data and browsing analysis results
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi import Path as PathParam
from fastapi.responses import Response
from pydantic import BaseModel, Field

from commentsense.app.config import Config
from commentsense.app.dependencies import (
    get_analysis_service,
    get_app_config,
    get_ingestion_service,
    get_session_store,
)
from commentsense.domain.models import CommentFilter, FileProcessingResult
from commentsense.services import (
    AnalysisSessionStore,
    CommentAnalysisService,
    FeatureDisabledError,
    IngestionService,
    ScriptedAssistant,
    ServiceError,
    error_to_http_status,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["Analysis"])


# ============================================================================
# Request/Response Models
# ============================================================================


class FileResultSummary(BaseModel):
    """Per-file upload outcome (records omitted)"""

    filename: str
    file_type: str
    status: str
    message: str = ""
    delimiter: Optional[str] = None
    rows_parsed: int = 0
    skipped_lines: int = 0
    stats: Optional[Dict[str, Any]] = None


class UploadResponse(BaseModel):
    """Upload + analysis response"""

    analysis_id: str = Field(..., description="Id used by the other endpoints")
    files: List[FileResultSummary]
    total_comments: int
    total_videos: int
    metrics: Dict[str, Any]


class ChatRequest(BaseModel):
    """Question for the scripted assistant"""

    question: str = Field(..., min_length=1, description="Free-text question")


class ChatResponse(BaseModel):
    """Assistant answer"""

    question: str
    answer: str
    suggested_questions: List[str] = Field(default_factory=list)


# ============================================================================
# Helpers
# ============================================================================


def _summarize(result: FileProcessingResult) -> FileResultSummary:
    return FileResultSummary(
        filename=result.filename,
        file_type=result.file_type.value,
        status=result.status.value,
        message=result.message,
        delimiter=result.delimiter,
        rows_parsed=result.rows_parsed,
        skipped_lines=result.skipped_lines,
        stats=result.stats.model_dump(by_alias=True) if result.stats else None,
    )


def _http_error(error: ServiceError) -> HTTPException:
    return HTTPException(status_code=error_to_http_status(error), detail=error.to_dict())


def _comment_filter(
    search: str = Query("", description="Search text and keywords"),
    category: str = Query("all", description="Category or 'all'"),
    sentiment: str = Query("all", description="positive / negative / neutral / all"),
    spam: str = Query("all", description="all / spam / clean"),
    quality: str = Query("all", description="all / quality / low-quality"),
) -> CommentFilter:
    return CommentFilter(
        search=search, category=category, sentiment=sentiment, spam=spam, quality=quality
    )


# ============================================================================
# Upload
# ============================================================================


@router.post("/upload", response_model=UploadResponse)
def upload_files(
    files: List[UploadFile] = File(..., description="Comment and/or video files"),
    ingestion: IngestionService = Depends(get_ingestion_service),
    analysis: CommentAnalysisService = Depends(get_analysis_service),
    store: AnalysisSessionStore = Depends(get_session_store),
):
    """
    Upload one or more delimited files and analyze them

    Every file is processed independently. The request fails with 422 only
    when no file could be ingested. Parsing and scoring are CPU-bound, so
    this is a plain ``def`` endpoint and runs in the threadpool.
    """
    payload = [
        (upload.filename or "upload", ingestion.read_upload(upload.file)) for upload in files
    ]
    batch = ingestion.process_files(payload)
    summaries = [_summarize(result) for result in batch.results]

    if not batch.succeeded:
        logger.warning(f"Upload rejected: none of {len(payload)} files could be ingested")
        raise HTTPException(
            status_code=422,
            detail={
                "error": "IngestionError",
                "message": "No file could be processed",
                "files": [s.model_dump() for s in summaries],
            },
        )

    try:
        report = analysis.analyze(batch.comments, batch.videos)
    except ServiceError as e:
        raise _http_error(e)

    analysis_id = store.save(report)
    logger.info(f"📥 Upload analyzed: {analysis_id}")

    return UploadResponse(
        analysis_id=analysis_id,
        files=summaries,
        total_comments=len(report.comments),
        total_videos=len(report.videos),
        metrics=report.metrics.model_dump(mode="json", by_alias=True),
    )


# ============================================================================
# Results
# ============================================================================


@router.get("/{analysis_id}/metrics")
async def get_metrics(
    analysis_id: str = PathParam(..., description="Analysis id"),
    store: AnalysisSessionStore = Depends(get_session_store),
) -> Dict[str, Any]:
    """Dataset metrics of a stored analysis"""
    try:
        report = store.get(analysis_id)
    except ServiceError as e:
        raise _http_error(e)
    return report.metrics.model_dump(mode="json", by_alias=True)


@router.get("/{analysis_id}/comments")
def get_comments(
    analysis_id: str = PathParam(..., description="Analysis id"),
    criteria: CommentFilter = Depends(_comment_filter),
    limit: Optional[int] = Query(None, ge=1, description="Max comments returned"),
    offset: int = Query(0, ge=0, description="Comments to skip"),
    store: AnalysisSessionStore = Depends(get_session_store),
    analysis: CommentAnalysisService = Depends(get_analysis_service),
    config: Config = Depends(get_app_config),
) -> Dict[str, Any]:
    """Filtered analyzed comments"""
    try:
        report = store.get(analysis_id)
        selected = analysis.filter_comments(report.comments, criteria)
    except ServiceError as e:
        raise _http_error(e)

    limit = limit or config.analysis.comment_preview_limit
    page = selected[offset:offset + limit]
    return {
        "total": len(selected),
        "offset": offset,
        "limit": limit,
        "comments": [c.model_dump(mode="json", by_alias=True) for c in page],
    }


@router.get("/{analysis_id}/videos")
async def get_videos(
    analysis_id: str = PathParam(..., description="Analysis id"),
    store: AnalysisSessionStore = Depends(get_session_store),
) -> Dict[str, Any]:
    """Analyzed videos of a stored analysis"""
    try:
        report = store.get(analysis_id)
    except ServiceError as e:
        raise _http_error(e)
    return {
        "total": len(report.videos),
        "videos": [v.model_dump(mode="json", by_alias=True) for v in report.videos],
    }


@router.get("/{analysis_id}/categories")
def get_category_insights(
    analysis_id: str = PathParam(..., description="Analysis id"),
    store: AnalysisSessionStore = Depends(get_session_store),
    analysis: CommentAnalysisService = Depends(get_analysis_service),
) -> List[Dict[str, Any]]:
    """Per-category keyword, quality and sentiment summary"""
    try:
        report = store.get(analysis_id)
    except ServiceError as e:
        raise _http_error(e)
    return [
        insight.model_dump(mode="json", by_alias=True)
        for insight in analysis.category_insights(report.comments)
    ]


@router.get("/{analysis_id}/export")
def export_comments(
    analysis_id: str = PathParam(..., description="Analysis id"),
    criteria: CommentFilter = Depends(_comment_filter),
    store: AnalysisSessionStore = Depends(get_session_store),
    analysis: CommentAnalysisService = Depends(get_analysis_service),
    config: Config = Depends(get_app_config),
):
    """Download filtered comments as CSV"""
    try:
        if not config.features.enable_export:
            raise FeatureDisabledError("export")
        report = store.get(analysis_id)
        content = analysis.export(report.comments, criteria)
    except ServiceError as e:
        raise _http_error(e)

    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{config.export.filename}"'
        },
    )


@router.post("/{analysis_id}/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    analysis_id: str = PathParam(..., description="Analysis id"),
    store: AnalysisSessionStore = Depends(get_session_store),
    config: Config = Depends(get_app_config),
):
    """Ask the scripted assistant about a stored analysis"""
    try:
        if not config.features.enable_assistant:
            raise FeatureDisabledError("assistant")
        report = store.get(analysis_id)
    except ServiceError as e:
        raise _http_error(e)

    assistant = ScriptedAssistant(report)
    return ChatResponse(
        question=request.question,
        answer=assistant.respond(request.question),
        suggested_questions=assistant.suggested_questions(),
    )


@router.delete("/{analysis_id}")
async def delete_analysis(
    analysis_id: str = PathParam(..., description="Analysis id"),
    store: AnalysisSessionStore = Depends(get_session_store),
) -> Dict[str, str]:
    """Forget a stored analysis"""
    try:
        store.delete(analysis_id)
    except ServiceError as e:
        raise _http_error(e)
    return {"analysis_id": analysis_id, "status": "deleted"}
