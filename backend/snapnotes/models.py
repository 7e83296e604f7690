"""
Typed shape of the page analysis returned by the AI service.

The service is asked to answer with JSON matching ``encoder.ANALYSIS_SCHEMA``,
but a generative model does not guarantee it. Everything it returns goes
through ``parse_analysis`` which either yields a complete ``AnalysisResult``
or raises ``MalformedAnalysisResult``; nothing half-validated escapes.

Wire names are camelCase (``partOfSpeech``, ``correctAnswer`` ...), Python
attributes are snake_case. Models are frozen and sequences are tuples, so a
result can be shared between views for the whole analysis session.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import (
	BaseModel,
	ConfigDict,
	StringConstraints,
	ValidationError,
	field_validator,
	model_validator,
)
from pydantic.alias_generators import to_camel

from .errors import MalformedAnalysisResult


logger = logging.getLogger(__name__)

# Hard ceiling for mind-map nesting; the root is depth 0
MAX_MIND_MAP_DEPTH = 32

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _WireModel(BaseModel):
	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		frozen=True,
	)

	@model_validator(mode="before")
	@classmethod
	def _drop_nulls(cls, data: Any) -> Any:
		# The model sometimes emits `null` for fields it has nothing to say about.
		# Treat those as absent so defaults apply and required fields report "missing".
		if isinstance(data, dict):
			return {k: v for k, v in data.items() if v is not None}
		return data


class VocabularyEntry(_WireModel):
	word: NonEmptyStr
	part_of_speech: NonEmptyStr
	definition_primary: NonEmptyStr
	definition_secondary: NonEmptyStr
	usage_note: Optional[str] = None
	example_sentence: str = ""
	derivatives: Tuple[str, ...] = ()


class GrammarPoint(_WireModel):
	pattern: str = ""
	structure: str = ""
	explanation: str = ""
	example_sentence: str = ""


class WritingAnalysis(_WireModel):
	genre_type: str = ""
	logic: str = ""
	summary: Optional[str] = None
	framework: Tuple[str, ...] = ()


class MindMapNode(_WireModel):
	id: Optional[str] = None
	label: NonEmptyStr
	children: Tuple[MindMapNode, ...] = ()

	@property
	def is_leaf(self) -> bool:
		return not self.children


class QuizKind(str, Enum):
	MATCHING = "matching"
	SPELLING = "spelling"
	MULTIPLE_CHOICE = "multipleChoice"
	GRAMMAR = "grammar"
	READING = "reading"

	@property
	def is_choice(self) -> bool:
		return self in _CHOICE_KINDS


_CHOICE_KINDS = frozenset({QuizKind.MULTIPLE_CHOICE, QuizKind.GRAMMAR, QuizKind.READING})


class QuizQuestion(_WireModel):
	id: NonEmptyStr
	kind: QuizKind
	prompt: str = ""
	options: Tuple[str, ...] = ()
	correct_answer: NonEmptyStr
	explanation: str = ""
	related_word: Optional[str] = None

	@model_validator(mode="after")
	def _choice_needs_options(self) -> QuizQuestion:
		if self.kind.is_choice and not self.options:
			raise ValueError(f"options are required for {self.kind.value} questions")
		return self


class AnalysisResult(_WireModel):
	title: str
	vocabulary: Tuple[VocabularyEntry, ...]
	grammar: Tuple[GrammarPoint, ...]
	writing: WritingAnalysis
	background: str = ""
	mind_map: MindMapNode
	quizzes: Tuple[QuizQuestion, ...]

	@field_validator("quizzes")
	@classmethod
	def _unique_quiz_ids(cls, quizzes: Tuple[QuizQuestion, ...]) -> Tuple[QuizQuestion, ...]:
		seen = set()
		for q in quizzes:
			if q.id in seen:
				raise ValueError(f"duplicate quiz id {q.id!r}")
			seen.add(q.id)
		return quizzes

	@field_validator("mind_map")
	@classmethod
	def _bounded_mind_map(cls, root: MindMapNode) -> MindMapNode:
		# JSON cannot express a cycle, so a bounded depth is all that is left to check
		stack: List[Tuple[MindMapNode, int]] = [(root, 0)]
		while stack:
			node, depth = stack.pop()
			if depth > MAX_MIND_MAP_DEPTH:
				raise ValueError(f"mind map nests deeper than {MAX_MIND_MAP_DEPTH} levels")
			stack.extend((child, depth + 1) for child in node.children)
		return root

	def quiz_by_id(self) -> Dict[str, QuizQuestion]:
		return {q.id: q for q in self.quizzes}


# Question id -> answer typed or picked by the user
AnswerMap = Mapping[str, str]


def _format_issues(exc: ValidationError) -> List[str]:
	issues: List[str] = []
	for err in exc.errors():
		loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
		issues.append(f"{loc}: {err.get('msg', 'invalid')}")
	return issues


def parse_analysis(raw: Union[str, bytes, bytearray, Mapping[str, Any]]) -> AnalysisResult:
	"""Validate the service output and return the typed result.

	Accepts either the raw JSON text or an already decoded mapping. Raises
	``MalformedAnalysisResult`` listing every problem pydantic found.
	"""
	try:
		if isinstance(raw, (str, bytes, bytearray)):
			return AnalysisResult.model_validate_json(raw)
		if not isinstance(raw, Mapping):
			raise MalformedAnalysisResult(
				"analysis result must be a JSON object",
				[f"<root>: expected an object, got {type(raw).__name__}"],
			)
		return AnalysisResult.model_validate(dict(raw))
	except ValidationError as exc:
		issues = _format_issues(exc)
		logger.warning("Rejected analysis result with %d issue(s): %s", len(issues), "; ".join(issues[:5]))
		raise MalformedAnalysisResult("analysis result does not match the expected schema", issues) from exc
