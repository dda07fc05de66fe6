import os
import time

from odia_ocr.cleanup import purge_orphaned_uploads
from odia_ocr.models import utcnow
from odia_ocr.storage import ImageStore


def _touch(path, age_seconds: float) -> None:
	path.write_bytes(b"img")
	stamp = time.time() - age_seconds
	os.utime(path, (stamp, stamp))


class TestPurgeOrphanedUploads:
	def test_only_old_unreferenced_files_go(self, db, make_task, tmp_path) -> None:
		store = ImageStore(tmp_path / "uploads")
		store.ensure_root()
		make_task()  # references /uploads/seed.png
		_touch(store.root / "seed.png", 7200)
		_touch(store.root / "orphan.png", 7200)
		_touch(store.root / "fresh.png", 60)

		assert purge_orphaned_uploads(db, store, now=utcnow()) == 1
		assert sorted(p.name for p in store.root.iterdir()) == ["fresh.png", "seed.png"]

	def test_missing_directory(self, db, tmp_path) -> None:
		assert purge_orphaned_uploads(db, ImageStore(tmp_path / "nowhere")) == 0


class TestImageStore:
	def test_save_and_delete(self, tmp_path) -> None:
		store = ImageStore(tmp_path / "uploads")
		stored = store.save(b"png-bytes", "image/png")
		assert stored.path.read_bytes() == b"png-bytes"
		assert stored.url == f"/uploads/{stored.path.name}"
		assert store.path_for_url(stored.url) == stored.path
		store.delete(stored)
		assert not stored.path.exists()
		store.delete(stored)

	def test_foreign_url_has_no_path(self, tmp_path) -> None:
		assert ImageStore(tmp_path).path_for_url("https://cdn.example.com/a.png") is None
