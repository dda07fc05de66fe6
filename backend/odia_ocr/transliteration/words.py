from __future__ import annotations
import re
from typing import NamedTuple, Optional

_WHITESPACE_SPLIT = re.compile(r"(\s+)")
_ODIA = re.compile(r"[\u0B00-\u0B7F]")


class WordSpan(NamedTuple):
	word: str
	start: int
	end: int


def current_word(text: str, caret: int) -> Optional[WordSpan]:
	"""The non-whitespace run whose [start, end] range contains the caret."""
	pos = 0
	for piece in _WHITESPACE_SPLIT.split(text):
		start, end = pos, pos + len(piece)
		pos = end
		if not piece or piece.isspace():
			continue
		if start <= caret <= end:
			return WordSpan(piece, start, end)
	return None


def contains_odia(word: str) -> bool:
	return _ODIA.search(word) is not None
