from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .models import QuizKind


# Number of quiz questions requested from the model; one kind per two questions
QUIZ_QUESTION_TARGET = 10

# The response-schema dialect has no $ref, so the mind-map node type is unrolled
MIND_MAP_SCHEMA_DEPTH = 4


ANALYSIS_INSTRUCTION = (
	"Perform OCR and deeply analyze this English textbook page.\n"
	"Extract the key vocabulary (part of speech, an English definition as definitionPrimary, "
	"a Chinese gloss as definitionSecondary, a usage note, an example sentence and derivatives), "
	"the grammar points (pattern, structure formula, explanation, example sentence), "
	"the writing structure (genre, structural logic, summary, framework steps) and background information.\n"
	"Also generate a structured mind map of the key concepts, with a single root node, and "
	f"{QUIZ_QUESTION_TARGET} practice questions mixing all five kinds: vocabulary matching (matching), "
	"spelling (spelling), multiple choice (multipleChoice), grammar (grammar) and reading comprehension (reading).\n"
	"Every question needs a unique id. Choice questions (multipleChoice, grammar, reading) must list their options "
	"and the correctAnswer must be the exact text of one option. Spelling questions set relatedWord to the target word.\n"
	"Return results in structured JSON format."
)


def _string() -> Dict[str, Any]:
	return {"type": "STRING"}


def _string_list() -> Dict[str, Any]:
	return {"type": "ARRAY", "items": _string()}


def _mind_map_node_schema(levels: int) -> Dict[str, Any]:
	node: Dict[str, Any] = {
		"type": "OBJECT",
		"properties": {
			"id": _string(),
			"label": _string(),
		},
		"required": ["label"],
	}
	if levels > 1:
		node["properties"]["children"] = {
			"type": "ARRAY",
			"items": _mind_map_node_schema(levels - 1),
		}
	return node


ANALYSIS_SCHEMA: Dict[str, Any] = {
	"type": "OBJECT",
	"properties": {
		"title": {"type": "STRING", "description": "Textbook chapter or passage title"},
		"vocabulary": {
			"type": "ARRAY",
			"items": {
				"type": "OBJECT",
				"properties": {
					"word": _string(),
					"partOfSpeech": _string(),
					"definitionPrimary": {"type": "STRING", "description": "English definition"},
					"definitionSecondary": {"type": "STRING", "description": "Chinese gloss"},
					"usageNote": _string(),
					"exampleSentence": _string(),
					"derivatives": _string_list(),
				},
				"required": ["word", "partOfSpeech", "definitionPrimary", "definitionSecondary"],
			},
		},
		"grammar": {
			"type": "ARRAY",
			"items": {
				"type": "OBJECT",
				"properties": {
					"pattern": _string(),
					"structure": _string(),
					"explanation": _string(),
					"exampleSentence": _string(),
				},
			},
		},
		"writing": {
			"type": "OBJECT",
			"properties": {
				"genreType": _string(),
				"logic": _string(),
				"summary": _string(),
				"framework": _string_list(),
			},
		},
		"background": _string(),
		"mindMap": _mind_map_node_schema(MIND_MAP_SCHEMA_DEPTH),
		"quizzes": {
			"type": "ARRAY",
			"items": {
				"type": "OBJECT",
				"properties": {
					"id": _string(),
					"kind": {
						"type": "STRING",
						"enum": [k.value for k in QuizKind],
						"description": "matching, spelling, multipleChoice, grammar, or reading",
					},
					"prompt": _string(),
					"options": _string_list(),
					"correctAnswer": _string(),
					"explanation": _string(),
					"relatedWord": _string(),
				},
				"required": ["id", "kind", "correctAnswer"],
			},
		},
	},
	"required": ["title", "vocabulary", "grammar", "writing", "mindMap", "quizzes"],
}


@dataclass(frozen=True)
class ServiceRequest:
	image: bytes = field(repr=False)
	mime_type: str
	instruction: str = ANALYSIS_INSTRUCTION
	output_schema: Dict[str, Any] = field(default_factory=lambda: ANALYSIS_SCHEMA, repr=False)

	def to_parts(self) -> List[Dict[str, Any]]:
		"""Gemini content parts: the page image first, then the instruction."""
		data = base64.b64encode(self.image).decode("ascii")
		return [
			{"inline_data": {"mime_type": self.mime_type, "data": data}},
			{"text": self.instruction},
		]


def encode(image_bytes: bytes, mime_type: str) -> ServiceRequest:
	if not image_bytes:
		raise ValueError("image payload is empty")
	mime_type = (mime_type or "").strip()
	if not mime_type:
		raise ValueError("mime type is required")
	return ServiceRequest(image=bytes(image_bytes), mime_type=mime_type)
