"""
Per-process study state.

One ``StudySession`` owns the current analysis and the quiz being taken on
it. A new scan replaces both at once, and only after the new analysis has
validated; a failed scan leaves the previous state exactly as it was.

The quiz is a small state machine::

	unanswered --set_answer--> in_progress --submit--> submitted
	     ^                                                |
	     +--------------------- reset --------------------+
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .analysis import StructuredClient, analyze_textbook_image
from .errors import NoAnalysisAvailable, QuizAlreadySubmitted, ScanInProgress, UnknownQuestion
from .models import AnalysisResult, QuizQuestion
from .quiz import QuestionOutcome, ScoreResult, evaluate, review

logger = logging.getLogger(__name__)


class QuizPhase(str, Enum):
	UNANSWERED = "unanswered"
	IN_PROGRESS = "in_progress"
	SUBMITTED = "submitted"


class QuizSession:
	def __init__(self, quizzes: Sequence[QuizQuestion]) -> None:
		self._quizzes = tuple(quizzes)
		self._ids = frozenset(q.id for q in self._quizzes)
		self._answers: Dict[str, str] = {}
		self._score: Optional[ScoreResult] = None

	@property
	def quizzes(self) -> Sequence[QuizQuestion]:
		return self._quizzes

	@property
	def answers(self) -> Mapping[str, str]:
		return MappingProxyType(self._answers)

	@property
	def score(self) -> Optional[ScoreResult]:
		return self._score

	@property
	def phase(self) -> QuizPhase:
		if self._score is not None:
			return QuizPhase.SUBMITTED
		if self._answers:
			return QuizPhase.IN_PROGRESS
		return QuizPhase.UNANSWERED

	def set_answer(self, question_id: str, value: str) -> None:
		if self._score is not None:
			raise QuizAlreadySubmitted("quiz has been submitted; reset it to answer again")
		if question_id not in self._ids:
			raise UnknownQuestion(question_id)
		self._answers[question_id] = value

	def submit(self) -> ScoreResult:
		self._score = evaluate(self._quizzes, self._answers)
		logger.info("Quiz submitted: %d/%d correct", self._score.correct_count, self._score.total_count)
		return self._score

	def review(self) -> List[QuestionOutcome]:
		return review(self._quizzes, self._answers)

	def reset(self) -> None:
		self._answers = {}
		self._score = None


ClientFactory = Callable[[], StructuredClient]


class StudySession:
	def __init__(self, client_factory: ClientFactory) -> None:
		self._client_factory = client_factory
		self._result: Optional[AnalysisResult] = None
		self._quiz: QuizSession = QuizSession(())
		self._scanning = False

	@property
	def result(self) -> Optional[AnalysisResult]:
		return self._result

	@property
	def quiz(self) -> QuizSession:
		return self._quiz

	@property
	def scanning(self) -> bool:
		return self._scanning

	def require_result(self) -> AnalysisResult:
		if self._result is None:
			raise NoAnalysisAvailable("no textbook page has been analyzed yet")
		return self._result

	async def scan(self, image_bytes: bytes, mime_type: str) -> AnalysisResult:
		# Check-and-set happens before the first await, so it cannot interleave
		if self._scanning:
			raise ScanInProgress("an analysis is already running")
		self._scanning = True
		try:
			client = self._client_factory()
			try:
				result = await analyze_textbook_image(client, image_bytes, mime_type)
			finally:
				await client.aclose()
		finally:
			self._scanning = False
		self._result = result
		self._quiz = QuizSession(result.quizzes)
		return result
