from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .status import TaskSource, TaskStatus, status_label as label_for


class UserSummary(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	email: str
	display_name: Optional[str] = None


class LoginUser(UserSummary):
	is_first_time: bool


class ProfileUser(UserSummary):
	created_at: datetime


class AuthResponse(BaseModel):
	message: str
	token: str
	user: LoginUser


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


class CredentialsRequest(BaseModel):
	email: str
	password: str


class DisplayNameRequest(BaseModel):
	display_name: str


class UserResponse(BaseModel):
	message: str
	user: UserSummary


class TaskOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	image_url: str
	ocr_text: str
	corrected_text: str
	status: TaskStatus
	source: TaskSource
	assigned_to: Optional[str] = None
	created_at: datetime
	updated_at: datetime
	submitted_at: Optional[datetime] = None

	@computed_field
	@property
	def status_label(self) -> str:
		return label_for(self.status)


class TaskEnvelope(BaseModel):
	message: str
	task: TaskOut


class SubmitRequest(BaseModel):
	task_id: str
	corrected_text: str


class Pagination(BaseModel):
	total_pages: int
	current_page: int
	total: int
	has_next_page: bool
	has_prev_page: bool


class HistoryResponse(BaseModel):
	tasks: List[TaskOut]
	pagination: Pagination


class StatsOut(BaseModel):
	total_assigned: int
	total_submitted: int
	total_approved: int
	total_in_progress: int
	completion_rate: int
	accuracy_rate: int
	recent_activity: int


class StatsResponse(BaseModel):
	stats: StatsOut


class HomeStats(BaseModel):
	total_assigned: int
	total_submitted: int
	total_approved: int
	accuracy_rate: int


class MonthBucket(BaseModel):
	year: int
	month: int
	total_tasks: int
	submitted: int
	approved: int


class ProgressResponse(BaseModel):
	progress: List[MonthBucket]


class ProfileResponse(BaseModel):
	user: ProfileUser
	recent_tasks: List[TaskOut]


class TransliterateRequest(BaseModel):
	text: str
	caret: int = Field(ge=0)


class TransliterateResponse(BaseModel):
	word: Optional[str] = None
	start: Optional[int] = None
	end: Optional[int] = None
	suggestions: List[str] = Field(default_factory=list)
