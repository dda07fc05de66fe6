from __future__ import annotations
import base64
import logging
import httpx
from typing import Any, Dict, Optional
from .errors import ExtractionFailed
from .settings import settings

logger = logging.getLogger("odia_ocr.extraction")

EXTRACTION_PROMPT = "Extract and return the Odia text from this image only."


class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ValueError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		self.provider = settings.gemini_provider
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		self._client = httpx.AsyncClient(
			timeout=timeout if timeout is not None else settings.extraction_timeout_seconds,
			transport=transport,
		)

	async def extract_text(self, image: bytes, mime_type: str = "image/png") -> str:
		"""Single best-effort extraction call. No retries; any failure is ExtractionFailed."""
		parts = [
			{"inlineData": {"mimeType": mime_type, "data": base64.b64encode(image).decode("ascii")}},
			{"text": EXTRACTION_PROMPT},
		]
		payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
		return await self._post_payload(payload)

	async def _post_payload(self, payload: Dict[str, Any]) -> str:
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.TimeoutException as err:
			logger.warning("extraction_timeout model=%s", self.model)
			raise ExtractionFailed("Text extraction timed out.") from err
		except httpx.HTTPStatusError as err:
			logger.warning("extraction_http_error model=%s status=%s", self.model, err.response.status_code)
			raise ExtractionFailed() from err
		except httpx.RequestError as err:
			logger.warning("extraction_transport_error model=%s error=%s", self.model, err)
			raise ExtractionFailed() from err
		try:
			data = r.json()
			candidates = data.get("candidates") or []
			if not candidates:
				return ""
			parts = (candidates[0].get("content") or {}).get("parts") or []
			return "".join(str(p.get("text", "")) for p in parts)
		except (ValueError, AttributeError, TypeError) as err:
			logger.warning("extraction_bad_response model=%s body=%.200s", self.model, r.text)
			raise ExtractionFailed() from err

	async def aclose(self) -> None:
		await self._client.aclose()
