from __future__ import annotations
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_extractor, get_image_store, get_transliteration_engine
from ..errors import ExtractionFailed, UploadRejected, ValidationFailed
from ..gemini_client import GeminiClient
from ..reporting import DEFAULT_PROGRESS_MONTHS, monthly_progress, user_history, user_stats
from ..schemas import (
	HistoryResponse,
	MonthBucket,
	Pagination,
	ProgressResponse,
	StatsOut,
	StatsResponse,
	SubmitRequest,
	TaskEnvelope,
	TaskOut,
	TransliterateRequest,
	TransliterateResponse,
)
from ..security import CurrentUser, get_current_user
from ..settings import settings
from ..status import TaskStatus
from ..storage import ImageStore, validate_image
from ..task_store import TaskStore
from ..transliteration import TransliterationEngine

router = APIRouter(prefix="/api/ocr", tags=["ocr"])
logger = logging.getLogger("odia_ocr.ocr")


def _envelope(message: str, task) -> TaskEnvelope:
	return TaskEnvelope(message=message, task=TaskOut.model_validate(task))


@router.post("/upload", response_model=TaskEnvelope, status_code=201)
async def upload_image(
	image: Optional[UploadFile] = File(default=None),
	user: CurrentUser = Depends(get_current_user),
	db: Session = Depends(get_db),
	extractor: GeminiClient = Depends(get_extractor),
	images: ImageStore = Depends(get_image_store),
):
	if image is None:
		raise UploadRejected("No image file uploaded.")
	# One byte past the limit is enough to reject without buffering the rest
	content = await image.read(settings.max_upload_bytes + 1)
	mime_type = validate_image(image.filename, image.content_type, len(content), settings.max_upload_bytes)
	stored = images.save(content, mime_type)
	try:
		ocr_text = await extractor.extract_text(content, mime_type)
		task = TaskStore(db).create_from_upload(user.id, stored.url, ocr_text)
	except ExtractionFailed:
		images.delete(stored)
		logger.warning("upload_failed reason=extraction user_id=%s", user.id)
		raise
	except Exception:
		# No task row may point at a missing file, and no file may outlive a failed row
		images.delete(stored)
		db.rollback()
		raise
	return _envelope("Image uploaded and OCR task created successfully.", task)


@router.get("/assign", response_model=TaskEnvelope)
async def assign_task(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	task = TaskStore(db).claim_next(user.id)
	return _envelope("Task assigned successfully.", task)


@router.get("/task/{task_id}", response_model=TaskEnvelope)
async def get_task(task_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	task = TaskStore(db).get_owned(task_id, user.id)
	return _envelope("Task retrieved successfully.", task)


@router.post("/submit", response_model=TaskEnvelope)
async def submit_correction(req: SubmitRequest, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	if not req.task_id:
		raise ValidationFailed("Task ID and corrected text are required.")
	task = TaskStore(db).submit(req.task_id, user.id, req.corrected_text)
	return _envelope("Correction submitted successfully.", task)


@router.get("/history", response_model=HistoryResponse)
async def history(
	page: int = Query(default=1, ge=1),
	limit: int = Query(default=10, ge=1, le=100),
	status: str = Query(default="all"),
	user: CurrentUser = Depends(get_current_user),
	db: Session = Depends(get_db),
):
	status_filter: Optional[TaskStatus] = None
	if status and status != "all":
		try:
			status_filter = TaskStatus(status)
		except ValueError:
			raise ValidationFailed(f"Unknown status filter: {status}")
	result = user_history(db, user.id, page=page, limit=limit, status=status_filter)
	return HistoryResponse(
		tasks=[TaskOut.model_validate(t) for t in result["tasks"]],
		pagination=Pagination(**result["pagination"]),
	)


@router.get("/stats", response_model=StatsResponse)
async def stats(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	return StatsResponse(stats=StatsOut(**user_stats(db, user.id).to_dict()))


@router.get("/progress", response_model=ProgressResponse)
async def progress(
	months: int = Query(default=DEFAULT_PROGRESS_MONTHS, ge=1, le=60),
	user: CurrentUser = Depends(get_current_user),
	db: Session = Depends(get_db),
):
	buckets = monthly_progress(db, user.id, months)
	return ProgressResponse(progress=[MonthBucket(**b) for b in buckets])


@router.post("/transliterate", response_model=TransliterateResponse)
async def transliterate(
	req: TransliterateRequest,
	user: CurrentUser = Depends(get_current_user),
	engine: TransliterationEngine = Depends(get_transliteration_engine),
):
	suggestion = await engine.suggest(req.text, req.caret)
	if suggestion is None:
		return TransliterateResponse()
	return TransliterateResponse(
		word=suggestion.word,
		start=suggestion.start,
		end=suggestion.end,
		suggestions=suggestion.candidates,
	)
