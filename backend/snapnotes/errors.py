from __future__ import annotations
from typing import List, Optional


class SnapNotesError(Exception):
	"""Base class for every failure raised by the snapnotes core."""


class ServiceCallFailure(SnapNotesError):
	"""The AI call itself failed (network, auth, quota, empty candidate)."""

	def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
		super().__init__(message)
		self.status_code = status_code


class MalformedAnalysisResult(SnapNotesError):
	"""The AI answered, but the answer does not satisfy the analysis schema."""

	def __init__(self, message: str, issues: Optional[List[str]] = None) -> None:
		super().__init__(message)
		self.issues: List[str] = list(issues or [])


class ScanInProgress(SnapNotesError):
	pass


class NoAnalysisAvailable(SnapNotesError):
	pass


class UnknownQuestion(SnapNotesError):
	def __init__(self, question_id: str) -> None:
		super().__init__(f"unknown question id: {question_id!r}")
		self.question_id = question_id


class QuizAlreadySubmitted(SnapNotesError):
	pass


class MindMapTooDeep(SnapNotesError):
	def __init__(self, max_depth: int) -> None:
		super().__init__(f"mind map is deeper than {max_depth} levels")
		self.max_depth = max_depth
