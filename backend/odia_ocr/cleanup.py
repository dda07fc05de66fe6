from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import OcrTask, utcnow
from .storage import ImageStore

logger = logging.getLogger("odia_ocr.cleanup")

# Leave files this young alone; an upload may be mid-extraction
GRACE_PERIOD = timedelta(hours=1)


def purge_orphaned_uploads(db: Session, store: ImageStore, *, now: datetime | None = None) -> int:
	"""Delete stored images that no task references."""
	if not store.root.is_dir():
		return 0
	threshold = (now or utcnow()) - GRACE_PERIOD
	referenced = set()
	for url in db.execute(select(OcrTask.image_url)).scalars():
		path = store.path_for_url(url)
		if path is not None:
			referenced.add(path.name)

	removed = 0
	for path in store.root.iterdir():
		if not path.is_file() or path.name in referenced:
			continue
		if datetime.fromtimestamp(path.stat().st_mtime, timezone.utc).replace(tzinfo=None) >= threshold:
			continue
		try:
			path.unlink()
			removed += 1
		except OSError as err:
			logger.warning("orphan_purge_failed path=%s error=%s", path, err)
	if removed:
		logger.info("orphan_uploads_purged count=%s", removed)
	return removed
