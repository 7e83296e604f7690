from __future__ import annotations
from fastapi import HTTPException, Request

from ..errors import NoAnalysisAvailable
from ..models import AnalysisResult
from ..session import StudySession


def get_study_session(request: Request) -> StudySession:
	return request.app.state.study


def current_result(study: StudySession) -> AnalysisResult:
	try:
		return study.require_result()
	except NoAnalysisAvailable as e:
		raise HTTPException(status_code=404, detail="Scan a textbook page first") from e
