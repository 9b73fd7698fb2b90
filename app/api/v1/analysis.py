import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.core.security import check_api_key
from app.parsing.parse import ResumeExtractionError, extract_resume_text
from app.schemas.analysis import AnalysisRecord, AnalysisResult, AnalyzeRequest
from app.services.analysis_service import AnalysisValidationError, analyze
from app.storage import analysis_store
from app.storage.analysis_store import DuplicateAnalysisError

router = APIRouter()
logger = logging.getLogger(__name__)


def _auth(x_api_key: str | None = Header(default=None, alias="X-API-Key")):
    check_api_key(x_api_key)


def _resolve_resume_text(payload: AnalyzeRequest) -> str:
    if payload.resume_text is not None:
        return payload.resume_text

    try:
        parsed = extract_resume_text(
            payload.resume_file or "",
            file_name=payload.resume_file_name,
            allow_file_paths=False,
        )
    except ResumeExtractionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if parsed.parsing_warnings:
        logger.info("resume_extraction_warnings doc_id=%s warnings=%s", parsed.doc_id, parsed.parsing_warnings)
    return parsed.text


@router.post("/analysis", response_model=AnalysisResult)
@rate_limit()
def analyze_resume(request: Request, payload: AnalyzeRequest):
    _ = request
    resume_text = _resolve_resume_text(payload)
    if len(resume_text) > settings.max_resume_chars:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Resume text exceeds {settings.max_resume_chars} characters.",
        )

    try:
        result = analyze(payload.job_description, payload.keywords, resume_text)
    except AnalysisValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    try:
        analysis_store.save_analysis(
            result=result,
            job_description=payload.job_description,
            keywords=payload.keywords,
            resume_file_name=payload.resume_file_name,
        )
    except DuplicateAnalysisError as exc:
        logger.error("analysis_save_conflict analysis_id=%s", exc.analysis_id)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return result


@router.get("/analysis", response_model=list[AnalysisRecord])
def list_analyses(
    limit: int | None = Query(default=None, ge=0),
    _: None = Depends(_auth),
):
    if limit is not None:
        limit = min(limit, settings.max_list_limit)
    return analysis_store.list_analyses(limit=limit)


@router.get("/analysis/{analysis_id}", response_model=AnalysisRecord)
def get_analysis(analysis_id: str, _: None = Depends(_auth)):
    record = analysis_store.get_analysis(analysis_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Analysis not found.")
    return record
