from __future__ import annotations
from fastapi import Request

from .errors import ExtractionFailed
from .gemini_client import GeminiClient
from .storage import ImageStore
from .transliteration import TransliterationEngine

# Long-lived handles are built once at startup (see main.startup_event) and
# hung off app.state; routes reach them only through these dependencies.


def get_extractor(request: Request) -> GeminiClient:
	client = getattr(request.app.state, "gemini", None)
	if client is None:
		raise ExtractionFailed("Text extraction is not configured.")
	return client


def get_transliteration_engine(request: Request) -> TransliterationEngine:
	return request.app.state.transliteration


def get_image_store(request: Request) -> ImageStore:
	return request.app.state.images
