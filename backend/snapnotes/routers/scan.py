from __future__ import annotations
import logging
from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from ..errors import MalformedAnalysisResult, ScanInProgress, ServiceCallFailure
from ..mindmap import count_nodes
from ..session import StudySession
from ..settings import settings
from .deps import get_study_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scan", tags=["scan"])

SCAN_FAILED_DETAIL = "Failed to analyze image. Please check your API key or try again."


def _detect_mime_type(content: bytes) -> Optional[str]:
	try:
		with Image.open(BytesIO(content)) as img:
			fmt = img.format
	except (UnidentifiedImageError, OSError):
		return None
	if not fmt:
		return None
	return Image.MIME.get(fmt)


@router.post("")
async def scan_page(
	file: UploadFile = File(...),
	study: StudySession = Depends(get_study_session),
):
	if study.scanning:
		raise HTTPException(status_code=409, detail="An analysis is already running")
	content = await file.read()
	if not content:
		raise HTTPException(status_code=400, detail="image file is empty")
	if len(content) > settings.max_upload_bytes:
		raise HTTPException(status_code=413, detail="image file is too large")
	mime_type = file.content_type if (file.content_type or "").startswith("image/") else _detect_mime_type(content)
	if not mime_type:
		raise HTTPException(status_code=415, detail="upload is not a recognized image")
	try:
		result = await study.scan(content, mime_type)
	except ScanInProgress:
		raise HTTPException(status_code=409, detail="An analysis is already running")
	except MalformedAnalysisResult as e:
		raise HTTPException(status_code=502, detail={"message": SCAN_FAILED_DETAIL, "issues": e.issues[:20]})
	except ServiceCallFailure:
		raise HTTPException(status_code=502, detail=SCAN_FAILED_DETAIL)
	except ValueError as e:
		# Raised by GeminiClient when no API key is configured
		logger.error("Cannot start analysis: %s", e)
		raise HTTPException(status_code=503, detail=str(e))
	return {
		"title": result.title,
		"vocabulary_count": len(result.vocabulary),
		"grammar_count": len(result.grammar),
		"quiz_count": len(result.quizzes),
		"mind_map_nodes": count_nodes(result.mind_map),
	}


@router.get("/status")
async def scan_status(study: StudySession = Depends(get_study_session)):
	return {"scanning": study.scanning, "has_result": study.result is not None}
