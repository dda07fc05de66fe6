from __future__ import annotations
import enum
from typing import NamedTuple, assert_never


class TaskStatus(str, enum.Enum):
	ASSIGNED = "assigned"
	IN_PROGRESS = "in_progress"
	SUBMITTED = "submitted"
	APPROVED = "approved"


class TaskSource(str, enum.Enum):
	UPLOAD = "upload"
	SYSTEM = "system"


class Badge(NamedTuple):
	variant: str
	text: str
	icon: str


def status_badge(status: TaskStatus) -> Badge:
	"""Presentation for a task status. Every member must be handled here."""
	if status is TaskStatus.ASSIGNED:
		return Badge("secondary", "Assigned", "assignment")
	if status is TaskStatus.IN_PROGRESS:
		return Badge("warning", "In Progress", "hourglass_empty")
	if status is TaskStatus.SUBMITTED:
		return Badge("info", "Submitted", "send")
	if status is TaskStatus.APPROVED:
		return Badge("success", "Approved", "check_circle")
	assert_never(status)


def status_label(status: TaskStatus) -> str:
	return status_badge(status).text
