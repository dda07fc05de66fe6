from __future__ import annotations
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Text, Enum, ForeignKey, Index
from .db import Base
from .status import TaskStatus, TaskSource


def utcnow() -> datetime:
	# Naive UTC, the way the columns are stored
	return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
	return uuid.uuid4().hex


def _enum_values(enum_cls):
	return [member.value for member in enum_cls]


class User(Base):
	__tablename__ = "users"
	id = Column(String(32), primary_key=True, default=new_id)
	email = Column(String(256), unique=True, index=True, nullable=False)
	password_hash = Column(String(256), nullable=False)
	# Unset until the user picks one on first login
	display_name = Column(String(50), nullable=True)
	created_at = Column(DateTime, default=utcnow, nullable=False)
	updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class OcrTask(Base):
	__tablename__ = "ocr_tasks"
	id = Column(String(32), primary_key=True, default=new_id)
	image_url = Column(String(512), nullable=False)
	ocr_text = Column(Text, nullable=False, default="")
	corrected_text = Column(Text, nullable=False, default="")
	status = Column(
		Enum(TaskStatus, name="task_status", values_callable=_enum_values, native_enum=False),
		nullable=False,
		default=TaskStatus.ASSIGNED,
	)
	# NULL means the task sits in the pool waiting to be claimed
	assigned_to = Column(String(32), ForeignKey("users.id"), nullable=True, index=True)
	source = Column(
		Enum(TaskSource, name="task_source", values_callable=_enum_values, native_enum=False),
		nullable=False,
	)
	created_at = Column(DateTime, default=utcnow, nullable=False)
	updated_at = Column(DateTime, default=utcnow, nullable=False)
	submitted_at = Column(DateTime, nullable=True)

	__table_args__ = (
		Index("ix_ocr_tasks_pool", "status", "created_at"),
	)
