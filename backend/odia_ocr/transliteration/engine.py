from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .providers import CandidateProvider, GoogleInputToolsProvider, local_providers
from .words import contains_odia, current_word


logger = logging.getLogger("odia_ocr.transliteration")

MAX_SUGGESTIONS = 8
REMOTE_BUDGET_SECONDS = 0.8


@dataclass
class Suggestion:
	word: str
	start: int
	end: int
	candidates: List[str] = field(default_factory=list)


def merge_candidates(groups: Iterable[Optional[List[str]]], limit: int = MAX_SUGGESTIONS) -> List[str]:
	merged: List[str] = []
	for group in groups:
		for candidate in group or ():
			if candidate not in merged:
				merged.append(candidate)
	return merged[:limit]


class TransliterationEngine:
	"""Ranks Odia candidates for the word under the caret.

	Providers are consulted in order and their results concatenated with
	duplicates dropped, so list position is rank. Remote providers come first
	and degrade to None on their own, leaving the local candidates intact. A
	remote provider still pending after remote_budget seconds is dropped for
	that call.
	"""

	def __init__(
		self,
		providers: Sequence[CandidateProvider],
		*,
		limit: int = MAX_SUGGESTIONS,
		remote_budget: float = REMOTE_BUDGET_SECONDS,
	) -> None:
		self.providers = list(providers)
		self.limit = limit
		self.remote_budget = remote_budget

	@classmethod
	def from_settings(cls, settings) -> "TransliterationEngine":
		providers: List[CandidateProvider] = []
		if settings.transliteration_service_enabled:
			providers.append(
				GoogleInputToolsProvider(
					settings.transliteration_service_url,
					timeout=settings.transliteration_timeout_seconds,
					limit=settings.transliteration_remote_limit,
				)
			)
		providers.extend(local_providers())
		return cls(providers, remote_budget=settings.transliteration_remote_budget_seconds)

	async def candidates_for(self, word: str) -> List[str]:
		if not word or contains_odia(word):
			return []
		asking = [p for p in self.providers if len(word) >= p.min_length]
		# Providers run concurrently; gather keeps their order for ranking
		groups = await asyncio.gather(*(self._ask(p, word) for p in asking))
		return merge_candidates(groups, self.limit)

	async def _ask(self, provider: CandidateProvider, word: str) -> Optional[List[str]]:
		if not provider.remote:
			return await provider.candidates(word)
		try:
			return await asyncio.wait_for(provider.candidates(word), self.remote_budget)
		except asyncio.TimeoutError:
			logger.debug("remote_transliteration_slow provider=%s word=%s", provider.name, word)
			return None

	async def suggest(self, text: str, caret: int) -> Optional[Suggestion]:
		span = current_word(text, caret)
		if span is None or contains_odia(span.word):
			return None
		found = await self.candidates_for(span.word)
		if not found:
			return None
		return Suggestion(span.word, span.start, span.end, found)

	async def aclose(self) -> None:
		for provider in self.providers:
			close = getattr(provider, "aclose", None)
			if close is not None:
				await close()
