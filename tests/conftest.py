from __future__ import annotations
from datetime import datetime
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from odia_ocr.db import get_db, init_db, make_engine
from odia_ocr.errors import ExtractionFailed
from odia_ocr.main import create_app
from odia_ocr.models import OcrTask, User, utcnow
from odia_ocr.status import TaskSource, TaskStatus
from odia_ocr.storage import ImageStore
from odia_ocr.transliteration import TransliterationEngine, local_providers


class FakeExtractor:
	"""Stands in for the Gemini client; records calls and can be told to fail."""

	def __init__(self, text: str = "ଓଡ଼ିଆ ଲେଖା") -> None:
		self.text = text
		self.fail = False
		self.calls: list[tuple[int, str]] = []

	async def extract_text(self, image: bytes, mime_type: str = "image/png") -> str:
		self.calls.append((len(image), mime_type))
		if self.fail:
			raise ExtractionFailed()
		return self.text


@pytest.fixture()
def engine(tmp_path):
	eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
	init_db(eng)
	yield eng
	eng.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
	return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture()
def db(session_factory):
	session = session_factory()
	try:
		yield session
	finally:
		session.close()


@pytest.fixture()
def extractor() -> FakeExtractor:
	return FakeExtractor()


@pytest.fixture()
def upload_root(tmp_path):
	return tmp_path / "uploads"


@pytest.fixture()
def app(session_factory, extractor, upload_root):
	application = create_app()

	def _get_db():
		session = session_factory()
		try:
			yield session
		finally:
			session.close()

	application.dependency_overrides[get_db] = _get_db
	application.state.gemini = extractor
	application.state.images = ImageStore(upload_root)
	application.state.transliteration = TransliterationEngine(local_providers())
	return application


@pytest.fixture()
def client(app) -> TestClient:
	# Not entered as a context manager: startup would touch the real database
	return TestClient(app)


@pytest.fixture()
def make_user(db: Session) -> Callable[..., User]:
	counter = {"n": 0}

	def _make(email: Optional[str] = None, display_name: Optional[str] = None) -> User:
		counter["n"] += 1
		user = User(
			email=email or f"user{counter['n']}@example.com",
			password_hash="not-a-real-hash",
			display_name=display_name,
		)
		db.add(user)
		db.commit()
		db.refresh(user)
		return user

	return _make


@pytest.fixture()
def make_task(db: Session) -> Callable[..., OcrTask]:
	def _make(
		owner_id: Optional[str] = None,
		status: TaskStatus = TaskStatus.ASSIGNED,
		*,
		created_at: Optional[datetime] = None,
		updated_at: Optional[datetime] = None,
		source: TaskSource = TaskSource.SYSTEM,
		ocr_text: str = "ପ୍ରଥମ ପାଠ",
	) -> OcrTask:
		created = created_at or utcnow()
		task = OcrTask(
			image_url="/uploads/seed.png",
			ocr_text=ocr_text,
			corrected_text="",
			status=status,
			source=source,
			assigned_to=owner_id,
			created_at=created,
			updated_at=updated_at or created,
		)
		db.add(task)
		db.commit()
		db.refresh(task)
		return task

	return _make


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict]:
	"""Sign up through the API and return the response body."""

	def _register(email: str, password: str = "secret1") -> dict:
		response = client.post("/api/auth/signup", json={"email": email, "password": password})
		assert response.status_code == 201, response.text
		return response.json()

	return _register


def bearer(token: str) -> dict:
	return {"Authorization": f"Bearer {token}"}
