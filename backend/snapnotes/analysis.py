from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol

from .encoder import encode
from .errors import MalformedAnalysisResult, ServiceCallFailure
from .mindmap import count_nodes
from .models import AnalysisResult, parse_analysis

logger = logging.getLogger(__name__)


class StructuredClient(Protocol):
	async def generate_structured(self, parts: List[Dict[str, Any]], response_schema: Dict[str, Any]) -> str: ...

	async def aclose(self) -> None: ...


async def analyze_textbook_image(client: StructuredClient, image_bytes: bytes, mime_type: str) -> AnalysisResult:
	"""Send one page image to the AI service and return the validated analysis.

	Raises ``ServiceCallFailure`` when the call fails and
	``MalformedAnalysisResult`` when the answer does not validate.
	"""
	request = encode(image_bytes, mime_type)
	logger.info("Analyzing page image (%d bytes, %s)", len(request.image), request.mime_type)
	try:
		raw = await client.generate_structured(request.to_parts(), request.output_schema)
	except ServiceCallFailure as exc:
		logger.error("Page analysis call failed: %s", exc)
		raise
	try:
		result = parse_analysis(raw)
	except MalformedAnalysisResult:
		logger.error("Page analysis returned an invalid document")
		raise
	logger.info(
		"Analysis %r ready: %d words, %d grammar points, %d quizzes, %d mind-map nodes",
		result.title,
		len(result.vocabulary),
		len(result.grammar),
		len(result.quizzes),
		count_nodes(result.mind_map),
	)
	return result
