from __future__ import annotations
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from .errors import UploadRejected

logger = logging.getLogger("odia_ocr.storage")

URL_PREFIX = "/uploads"

ALLOWED_IMAGE_TYPES = {
	"image/jpeg": ".jpg",
	"image/png": ".png",
	"image/gif": ".gif",
}
_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}


@dataclass(frozen=True)
class StoredImage:
	path: Path
	url: str
	mime_type: str


def validate_image(filename: str | None, content_type: str | None, size: int, max_bytes: int) -> str:
	"""Return the MIME type to hand to the extractor, or raise UploadRejected."""
	if size <= 0:
		raise UploadRejected("No image file uploaded.")
	if size > max_bytes:
		raise UploadRejected(
			f"Image exceeds the {max_bytes // (1024 * 1024)}MB limit.",
			error_code="UPLOAD_TOO_LARGE",
			status_code=413,
		)
	mime = (content_type or "").split(";")[0].strip().lower()
	ext = os.path.splitext(filename or "")[1].lower()
	if mime not in ALLOWED_IMAGE_TYPES or ext not in _EXTENSIONS:
		raise UploadRejected()
	return mime


class ImageStore:
	def __init__(self, root: str | Path) -> None:
		self.root = Path(root)

	def ensure_root(self) -> None:
		self.root.mkdir(parents=True, exist_ok=True)

	def save(self, content: bytes, mime_type: str) -> StoredImage:
		self.ensure_root()
		name = f"image-{uuid.uuid4().hex}{ALLOWED_IMAGE_TYPES[mime_type]}"
		path = self.root / name
		path.write_bytes(content)
		return StoredImage(path=path, url=f"{URL_PREFIX}/{name}", mime_type=mime_type)

	def delete(self, stored: StoredImage) -> None:
		try:
			stored.path.unlink()
		except FileNotFoundError:
			pass
		except OSError as err:
			logger.error("upload_cleanup_failed path=%s error=%s", stored.path, err)

	def path_for_url(self, url: str) -> Path | None:
		if not url.startswith(URL_PREFIX + "/"):
			return None
		return self.root / url[len(URL_PREFIX) + 1:]
