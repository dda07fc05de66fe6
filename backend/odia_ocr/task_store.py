from __future__ import annotations
import logging
from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from .errors import InvalidTransition, NoTaskAvailable, TaskNotFound
from .models import OcrTask, utcnow
from .status import TaskSource, TaskStatus

logger = logging.getLogger("odia_ocr.tasks")

# How many pool candidates to fetch per pass when claiming
CLAIM_BATCH = 10

# Statuses from which a submit is accepted. Re-submitting a submitted task
# overwrites the correction until it is approved.
_SUBMITTABLE = (TaskStatus.IN_PROGRESS, TaskStatus.SUBMITTED)


class TaskStore:
	"""All task state transitions. Every write touches exactly one row."""

	def __init__(self, db: Session) -> None:
		self.db = db

	def create_from_upload(self, owner_id: str, image_url: str, ocr_text: str) -> OcrTask:
		now = utcnow()
		task = OcrTask(
			image_url=image_url,
			ocr_text=ocr_text,
			corrected_text="",
			assigned_to=owner_id,
			status=TaskStatus.IN_PROGRESS,
			source=TaskSource.UPLOAD,
			created_at=now,
			updated_at=now,
		)
		self.db.add(task)
		self.db.commit()
		self.db.refresh(task)
		logger.info("task_created task_id=%s user_id=%s source=upload", task.id, owner_id)
		return task

	def seed_system_task(self, image_url: str, ocr_text: str, *, assigned_to: Optional[str] = None) -> OcrTask:
		now = utcnow()
		task = OcrTask(
			image_url=image_url,
			ocr_text=ocr_text,
			corrected_text="",
			assigned_to=assigned_to,
			status=TaskStatus.ASSIGNED,
			source=TaskSource.SYSTEM,
			created_at=now,
			updated_at=now,
		)
		self.db.add(task)
		self.db.commit()
		self.db.refresh(task)
		return task

	def get_owned(self, task_id: str, user_id: str) -> OcrTask:
		task = self.db.get(OcrTask, task_id)
		if task is None or task.assigned_to != user_id:
			raise TaskNotFound()
		return task

	def _eligible_ids(self, user_id: str) -> List[str]:
		stmt = (
			select(OcrTask.id)
			.where(
				OcrTask.status == TaskStatus.ASSIGNED,
				or_(OcrTask.assigned_to.is_(None), OcrTask.assigned_to == user_id),
			)
			.order_by(OcrTask.created_at.asc(), OcrTask.id.asc())
			.limit(CLAIM_BATCH)
		)
		return list(self.db.execute(stmt).scalars())

	def try_claim(self, task_id: str, user_id: str) -> bool:
		"""Compare-and-set: succeeds only if the row is still claimable by user_id."""
		result = self.db.execute(
			update(OcrTask)
			.where(
				OcrTask.id == task_id,
				OcrTask.status == TaskStatus.ASSIGNED,
				or_(OcrTask.assigned_to.is_(None), OcrTask.assigned_to == user_id),
			)
			.values(status=TaskStatus.IN_PROGRESS, assigned_to=user_id, updated_at=utcnow())
			.execution_options(synchronize_session=False)
		)
		self.db.commit()
		return result.rowcount == 1

	def claim_next(self, user_id: str) -> OcrTask:
		while True:
			candidates = self._eligible_ids(user_id)
			if not candidates:
				raise NoTaskAvailable()
			for task_id in candidates:
				if self.try_claim(task_id, user_id):
					task = self.db.get(OcrTask, task_id)
					self.db.refresh(task)
					logger.info("task_claimed task_id=%s user_id=%s", task_id, user_id)
					return task
				logger.debug("task_claim_lost task_id=%s user_id=%s", task_id, user_id)

	def submit(self, task_id: str, user_id: str, corrected_text: str) -> OcrTask:
		now = utcnow()
		result = self.db.execute(
			update(OcrTask)
			.where(
				OcrTask.id == task_id,
				OcrTask.assigned_to == user_id,
				OcrTask.status.in_(_SUBMITTABLE),
			)
			.values(
				corrected_text=corrected_text,
				status=TaskStatus.SUBMITTED,
				submitted_at=func.coalesce(OcrTask.submitted_at, now),
				updated_at=now,
			)
			.execution_options(synchronize_session=False)
		)
		self.db.commit()
		if result.rowcount != 1:
			task = self.get_owned(task_id, user_id)
			raise InvalidTransition(f"Cannot submit a task that is {task.status.value}.")
		task = self.db.get(OcrTask, task_id)
		self.db.refresh(task)
		logger.info("task_submitted task_id=%s user_id=%s", task_id, user_id)
		return task

	def mark_approved(self, task_id: str) -> OcrTask:
		# Entry point for the external approval mechanism
		task = self.db.get(OcrTask, task_id)
		if task is None:
			raise TaskNotFound()
		if task.status is not TaskStatus.SUBMITTED:
			raise InvalidTransition(f"Cannot approve a task that is {task.status.value}.")
		task.status = TaskStatus.APPROVED
		task.updated_at = utcnow()
		self.db.commit()
		self.db.refresh(task)
		return task
