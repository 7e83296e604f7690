from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence

from .models import QuizQuestion


def normalize_answer(value: Optional[str]) -> str:
	"""Lower-case and trim; the only normalization applied before comparing answers."""
	if value is None:
		return ""
	return value.strip().lower()


def answers_match(submitted: Optional[str], expected: str) -> bool:
	return normalize_answer(submitted) == normalize_answer(expected)


@dataclass(frozen=True)
class ScoreResult:
	correct_count: int
	total_count: int

	@property
	def ratio(self) -> float:
		if self.total_count == 0:
			return 0.0
		return self.correct_count / self.total_count

	@property
	def percent(self) -> int:
		return round(self.ratio * 100)

	@property
	def is_perfect(self) -> bool:
		# An empty quiz has nothing to master
		return self.total_count > 0 and self.correct_count == self.total_count

	def as_dict(self) -> dict:
		return {
			"correct": self.correct_count,
			"total": self.total_count,
			"percent": self.percent,
			"perfect": self.is_perfect,
		}


class QuestionStatus(str, Enum):
	UNANSWERED = "unanswered"
	CORRECT = "correct"
	INCORRECT = "incorrect"


@dataclass(frozen=True)
class QuestionOutcome:
	question_id: str
	status: QuestionStatus
	submitted_answer: Optional[str] = None
	# Indexes into question.options; always None for free-text kinds
	selected_option: Optional[int] = None
	correct_option: Optional[int] = None

	@property
	def highlight_selected(self) -> bool:
		"""True when the user picked an option other than the correct one."""
		return self.selected_option is not None and self.selected_option != self.correct_option


def _find_option(options: Sequence[str], value: Optional[str]) -> Optional[int]:
	if value is None:
		return None
	wanted = normalize_answer(value)
	for idx, opt in enumerate(options):
		if normalize_answer(opt) == wanted:
			return idx
	return None


def grade_question(question: QuizQuestion, answers: Mapping[str, str]) -> QuestionOutcome:
	submitted = answers.get(question.id)
	if submitted is None:
		status = QuestionStatus.UNANSWERED
	elif answers_match(submitted, question.correct_answer):
		status = QuestionStatus.CORRECT
	else:
		status = QuestionStatus.INCORRECT

	selected: Optional[int] = None
	correct: Optional[int] = None
	if question.kind.is_choice:
		selected = _find_option(question.options, submitted)
		correct = _find_option(question.options, question.correct_answer)
	return QuestionOutcome(
		question_id=question.id,
		status=status,
		submitted_answer=submitted,
		selected_option=selected,
		correct_option=correct,
	)


def review(quizzes: Sequence[QuizQuestion], answers: Mapping[str, str]) -> List[QuestionOutcome]:
	return [grade_question(q, answers) for q in quizzes]


def evaluate(quizzes: Sequence[QuizQuestion], answers: Mapping[str, str]) -> ScoreResult:
	"""Score a quiz set against an answer map.

	Unanswered questions count as incorrect; ``total_count`` is always the
	size of the quiz set. Pure: neither argument is modified.
	"""
	correct = 0
	for q in quizzes:
		submitted = answers.get(q.id)
		if submitted is not None and answers_match(submitted, q.correct_answer):
			correct += 1
	return ScoreResult(correct_count=correct, total_count=len(quizzes))
