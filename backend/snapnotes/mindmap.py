from __future__ import annotations

from typing import List, NamedTuple, Tuple

from .errors import MindMapTooDeep
from .models import MAX_MIND_MAP_DEPTH, MindMapNode


class MindMapRow(NamedTuple):
	node: MindMapNode
	depth: int


def render(root: MindMapNode, max_depth: int = MAX_MIND_MAP_DEPTH) -> List[MindMapRow]:
	"""Pre-order walk pairing every node with its depth (root is 0).

	Uses an explicit stack, so branching factor and depth never touch the
	interpreter's recursion limit. Refuses to go below ``max_depth``.
	"""
	rows: List[MindMapRow] = []
	stack: List[Tuple[MindMapNode, int]] = [(root, 0)]
	while stack:
		node, depth = stack.pop()
		if depth > max_depth:
			raise MindMapTooDeep(max_depth)
		rows.append(MindMapRow(node, depth))
		# reversed so the first child is popped next
		for child in reversed(node.children):
			stack.append((child, depth + 1))
	return rows


def render_outline(root: MindMapNode, indent: str = "  ") -> str:
	return "\n".join(f"{indent * row.depth}{row.node.label}" for row in render(root))


def count_nodes(root: MindMapNode) -> int:
	return len(render(root))
