from fastapi import APIRouter, Depends, HTTPException

from ..errors import MindMapTooDeep
from ..mindmap import render, render_outline
from ..session import StudySession
from .deps import current_result, get_study_session

router = APIRouter(prefix="/mindmap", tags=["mindmap"])

@router.get("")
async def get_mind_map(study: StudySession = Depends(get_study_session)):
	result = current_result(study)
	try:
		rows = render(result.mind_map)
	except MindMapTooDeep as e:
		raise HTTPException(status_code=500, detail=str(e))
	return {
		"rows": [{"id": row.node.id, "label": row.node.label, "depth": row.depth} for row in rows],
		"outline": render_outline(result.mind_map),
	}
