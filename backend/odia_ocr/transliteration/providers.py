from __future__ import annotations
import logging
from typing import List, Optional

import httpx

from . import lexicon
from .variants import spelling_variants

logger = logging.getLogger("odia_ocr.transliteration")


class CandidateProvider:
	"""One source of candidates. Returns None when it has nothing to say for the word."""

	name = "base"
	# Words shorter than this are not sent to the provider
	min_length = 1
	# Remote providers are cut off after the engine's wait budget
	remote = False

	async def candidates(self, word: str) -> Optional[List[str]]:
		raise NotImplementedError


class DentalRetroflexProvider(CandidateProvider):
	name = "dental_retroflex"

	async def candidates(self, word: str) -> Optional[List[str]]:
		lowered = word.lower()
		for pair in lexicon.DENTAL_RETROFLEX_PAIRS:
			if lowered != pair.dental:
				continue
			if word == pair.retroflex:
				return [pair.retroflex_char, pair.dental_char]
			return [pair.dental_char, pair.retroflex_char]
		return None


class LexiconProvider(CandidateProvider):
	name = "lexicon"

	async def candidates(self, word: str) -> Optional[List[str]]:
		found = lexicon.lookup(word)
		return [found] if found is not None else None


class FuzzyVariantProvider(CandidateProvider):
	name = "fuzzy"

	async def candidates(self, word: str) -> Optional[List[str]]:
		literal = lexicon.lookup(word)
		found: List[str] = []
		for variant in spelling_variants(word):
			mapped = lexicon.lookup(variant)
			if mapped is not None and mapped != literal and mapped not in found:
				found.append(mapped)
		return found or None


class GoogleInputToolsProvider(CandidateProvider):
	"""Remote candidates from Google Input Tools. Best effort: any failure yields None."""

	name = "google_input_tools"
	min_length = 2
	remote = True

	def __init__(
		self,
		url: str = "https://inputtools.google.com/request",
		*,
		timeout: float = 2.0,
		limit: int = 3,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.url = url
		self.limit = limit
		self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

	async def candidates(self, word: str) -> Optional[List[str]]:
		form = {
			"text": word,
			"ime": "transliteration_en_or",
			"num": "5",
			"cp": "0",
			"cs": "1",
			"ie": "utf-8",
			"oe": "utf-8",
			"app": "demopage",
		}
		try:
			r = await self._client.post(self.url, data=form)
			r.raise_for_status()
			data = r.json()
			found = data[1][0][1]
		except (httpx.HTTPError, ValueError, LookupError, TypeError) as err:
			logger.debug("remote_transliteration_unavailable word=%s error=%s", word, err)
			return None
		found = [str(c) for c in found if c][: self.limit]
		return found or None

	async def aclose(self) -> None:
		await self._client.aclose()


def local_providers() -> List[CandidateProvider]:
	return [DentalRetroflexProvider(), LexiconProvider(), FuzzyVariantProvider()]
