from __future__ import annotations
import calendar
import math
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from .models import OcrTask, utcnow
from .status import TaskStatus

RECENT_ACTIVITY_WINDOW = timedelta(days=7)
DEFAULT_PROGRESS_MONTHS = 6


def percent(numerator: int, denominator: int) -> int:
	"""Integer percentage rounded half up; 0 when there is nothing to divide by."""
	if denominator <= 0:
		return 0
	return int(math.floor(numerator * 100 / denominator + 0.5))


def months_before(moment: datetime, months: int) -> datetime:
	month_index = moment.year * 12 + (moment.month - 1) - months
	year, month = divmod(month_index, 12)
	month += 1
	day = min(moment.day, calendar.monthrange(year, month)[1])
	return moment.replace(year=year, month=month, day=day)


@dataclass
class UserStats:
	total_assigned: int
	total_submitted: int
	total_approved: int
	total_in_progress: int
	completion_rate: int
	accuracy_rate: int
	recent_activity: int

	def to_dict(self) -> Dict[str, int]:
		return asdict(self)


def _count_if(status: TaskStatus):
	return func.coalesce(func.sum(case((OcrTask.status == status, 1), else_=0)), 0)


def user_stats(db: Session, user_id: str, *, now: Optional[datetime] = None) -> UserStats:
	now = now or utcnow()
	row = db.execute(
		select(
			func.count(OcrTask.id),
			_count_if(TaskStatus.SUBMITTED),
			_count_if(TaskStatus.APPROVED),
			_count_if(TaskStatus.IN_PROGRESS),
		).where(OcrTask.assigned_to == user_id)
	).one()
	assigned, submitted, approved, in_progress = (int(v or 0) for v in row)
	recent = db.execute(
		select(func.count(OcrTask.id)).where(
			OcrTask.assigned_to == user_id,
			OcrTask.updated_at >= now - RECENT_ACTIVITY_WINDOW,
		)
	).scalar_one()
	return UserStats(
		total_assigned=assigned,
		total_submitted=submitted,
		total_approved=approved,
		total_in_progress=in_progress,
		completion_rate=percent(submitted, assigned),
		accuracy_rate=percent(approved, submitted),
		recent_activity=int(recent),
	)


def monthly_progress(db: Session, user_id: str, months: int = DEFAULT_PROGRESS_MONTHS, *, now: Optional[datetime] = None) -> List[Dict[str, int]]:
	now = now or utcnow()
	since = months_before(now, months)
	rows = db.execute(
		select(OcrTask.created_at, OcrTask.status).where(
			OcrTask.assigned_to == user_id,
			OcrTask.created_at >= since,
		)
	).all()
	buckets: Dict[tuple, Dict[str, int]] = {}
	for created_at, status in rows:
		key = (created_at.year, created_at.month)
		bucket = buckets.setdefault(key, {"year": key[0], "month": key[1], "total_tasks": 0, "submitted": 0, "approved": 0})
		bucket["total_tasks"] += 1
		if status is TaskStatus.SUBMITTED:
			bucket["submitted"] += 1
		elif status is TaskStatus.APPROVED:
			bucket["approved"] += 1
	return [buckets[key] for key in sorted(buckets)]


def user_history(db: Session, user_id: str, *, page: int = 1, limit: int = 10, status: Optional[TaskStatus] = None) -> Dict[str, Any]:
	filters = [OcrTask.assigned_to == user_id]
	if status is not None:
		filters.append(OcrTask.status == status)
	total = db.execute(select(func.count(OcrTask.id)).where(*filters)).scalar_one()
	tasks = list(
		db.execute(
			select(OcrTask)
			.where(*filters)
			.order_by(OcrTask.updated_at.desc(), OcrTask.id.asc())
			.offset((page - 1) * limit)
			.limit(limit)
		).scalars()
	)
	total_pages = math.ceil(total / limit) if limit else 0
	return {
		"tasks": tasks,
		"pagination": {
			"total_pages": total_pages,
			"current_page": page,
			"total": int(total),
			"has_next_page": page < total_pages,
			"has_prev_page": page > 1,
		},
	}


def recent_tasks(db: Session, user_id: str, limit: int = 5) -> List[OcrTask]:
	return list(
		db.execute(
			select(OcrTask)
			.where(OcrTask.assigned_to == user_id)
			.order_by(OcrTask.created_at.desc())
			.limit(limit)
		).scalars()
	)
