from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..errors import QuizAlreadySubmitted, UnknownQuestion
from ..models import QuizQuestion
from ..quiz import QuestionOutcome
from ..session import QuizPhase, StudySession
from .deps import current_result, get_study_session

router = APIRouter(prefix="/practice", tags=["practice"])


class AnswerRequest(BaseModel):
	# Any string is a valid answer; an empty one is simply wrong
	value: str


def _question_view(q: QuizQuestion, revealed: bool) -> Dict[str, Any]:
	view: Dict[str, Any] = {
		"id": q.id,
		"kind": q.kind.value,
		"prompt": q.prompt,
		# matching has no dedicated widget and is answered as free text
		"input": "choice" if q.kind.is_choice else "text",
		"options": list(q.options) if q.kind.is_choice else [],
		"relatedWord": q.related_word,
	}
	if revealed:
		view["correctAnswer"] = q.correct_answer
		view["explanation"] = q.explanation
	return view


def _outcome_view(o: QuestionOutcome) -> Dict[str, Any]:
	return {
		"id": o.question_id,
		"status": o.status.value,
		"submitted": o.submitted_answer,
		"selectedOption": o.selected_option,
		"correctOption": o.correct_option,
		"highlightSelected": o.highlight_selected,
	}


def _score_view(study: StudySession) -> Optional[Dict[str, Any]]:
	score = study.quiz.score
	return score.as_dict() if score is not None else None


@router.get("")
async def get_practice(study: StudySession = Depends(get_study_session)):
	current_result(study)
	quiz = study.quiz
	revealed = quiz.phase == QuizPhase.SUBMITTED
	return {
		"phase": quiz.phase.value,
		"questions": [_question_view(q, revealed) for q in quiz.quizzes],
		"answers": dict(quiz.answers),
		"score": _score_view(study),
	}


@router.put("/answers/{question_id}")
async def set_answer(question_id: str, req: AnswerRequest, study: StudySession = Depends(get_study_session)):
	current_result(study)
	try:
		study.quiz.set_answer(question_id, req.value)
	except UnknownQuestion as e:
		raise HTTPException(status_code=404, detail=str(e))
	except QuizAlreadySubmitted as e:
		raise HTTPException(status_code=409, detail=str(e))
	return {"phase": study.quiz.phase.value, "answers": dict(study.quiz.answers)}


@router.post("/submit")
async def submit(study: StudySession = Depends(get_study_session)):
	current_result(study)
	score = study.quiz.submit()
	return {
		"phase": study.quiz.phase.value,
		"score": score.as_dict(),
		"message": "Perfect Mastery!" if score.is_perfect else "Good effort! Keep studying.",
		"review": [_outcome_view(o) for o in study.quiz.review()],
	}


@router.post("/reset")
async def reset(study: StudySession = Depends(get_study_session)):
	current_result(study)
	study.quiz.reset()
	return {"phase": study.quiz.phase.value, "answers": {}, "score": None}
