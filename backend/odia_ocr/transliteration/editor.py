from __future__ import annotations
from typing import Optional

from .engine import Suggestion, TransliterationEngine

ACCEPT_KEYS = ("Tab", "Enter")
DISMISS_KEYS = ("Escape",)


class EditorSession:
	"""Buffer, caret and pending suggestion for one open task.

	Suggestions are advisory: only accept() writes a candidate into the buffer.
	"""

	def __init__(self, engine: TransliterationEngine, text: str = "", *, enabled: bool = True) -> None:
		self.engine = engine
		self.text = text
		self.caret = len(text)
		self.enabled = enabled
		self.suggestion: Optional[Suggestion] = None

	async def update(self, text: str, caret: int) -> Optional[Suggestion]:
		"""Record the user's edit and recompute suggestions for the word at the caret."""
		self.text = text
		self.caret = max(0, min(caret, len(text)))
		self.suggestion = None
		if self.enabled:
			self.suggestion = await self.engine.suggest(self.text, self.caret)
		return self.suggestion

	def accept(self, index: int = 0) -> bool:
		pending = self.suggestion
		if pending is None or not 0 <= index < len(pending.candidates):
			return False
		self.suggestion = None
		# The buffer moved on since the suggestion was computed
		if self.text[pending.start:pending.end] != pending.word:
			return False
		chosen = pending.candidates[index]
		self.text = self.text[:pending.start] + chosen + self.text[pending.end:]
		self.caret = pending.start + len(chosen)
		return True

	def dismiss(self) -> None:
		self.suggestion = None

	def toggle(self) -> bool:
		self.enabled = not self.enabled
		self.suggestion = None
		return self.enabled

	def handle_key(self, key: str) -> bool:
		"""True when the key was consumed by the suggestion popup."""
		if self.suggestion is None:
			return False
		if key in ACCEPT_KEYS:
			return self.accept(0)
		if key in DISMISS_KEYS:
			self.dismiss()
			return True
		return False
