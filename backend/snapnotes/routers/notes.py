from fastapi import APIRouter, Depends

from ..session import StudySession
from .deps import current_result, get_study_session

router = APIRouter(prefix="/notes", tags=["notes"])

@router.get("")
async def get_notes(study: StudySession = Depends(get_study_session)):
	result = current_result(study)
	# Title falls back the same way the notes header does
	data = result.model_dump(
		mode="json",
		by_alias=True,
		include={"title", "background", "vocabulary", "grammar", "writing"},
	)
	data["title"] = result.title or "Chapter Notes"
	return data
