from __future__ import annotations
import logging
import re

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import EmailAlreadyRegistered, Unauthenticated, UserNotFound, ValidationFailed
from ..models import User
from ..reporting import percent, recent_tasks, user_stats
from ..schemas import (
	AuthResponse,
	CredentialsRequest,
	DisplayNameRequest,
	HomeStats,
	LoginUser,
	ProfileResponse,
	ProfileUser,
	TaskOut,
	Token,
	UserResponse,
	UserSummary,
)
from ..security import CurrentUser, create_access_token, get_current_user, hash_password, verify_password

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger("odia_ocr.auth")

MIN_PASSWORD_LENGTH = 6
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_DISPLAY_NAME_RE = re.compile(r"^[a-zA-Z\s]+$")


def normalize_email(email: str) -> str:
	return (email or "").strip().lower()


def validate_email(email: str) -> str:
	email = normalize_email(email)
	if not _EMAIL_RE.match(email):
		raise ValidationFailed("Valid email required")
	return email


def validate_display_name(name: str) -> str:
	name = (name or "").strip()
	if len(name) < 2 or len(name) > 50:
		raise ValidationFailed("Display name must be between 2 and 50 characters long")
	if not _DISPLAY_NAME_RE.match(name):
		raise ValidationFailed("Display name can only contain letters and spaces")
	return name


def authenticate_user(db: Session, email: str, password: str) -> User:
	row = db.query(User).filter(User.email == normalize_email(email)).first()
	if row is None or not verify_password(password, row.password_hash):
		raise Unauthenticated(Unauthenticated.BAD_CREDENTIALS)
	return row


def _login_user(user: User, *, first_time: bool) -> LoginUser:
	return LoginUser(id=user.id, email=user.email, display_name=user.display_name, is_first_time=first_time)


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(req: CredentialsRequest, db: Session = Depends(get_db)):
	email = validate_email(req.email)
	if len(req.password or "") < MIN_PASSWORD_LENGTH:
		raise ValidationFailed(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
	if db.query(User).filter(User.email == email).first() is not None:
		raise EmailAlreadyRegistered()
	user = User(email=email, password_hash=hash_password(req.password), display_name=None)
	db.add(user)
	try:
		db.commit()
	except IntegrityError:
		# Lost a race with a concurrent signup for the same email
		db.rollback()
		raise EmailAlreadyRegistered()
	db.refresh(user)
	logger.info("user_registered user_id=%s", user.id)
	return AuthResponse(
		message="User created successfully.",
		token=create_access_token(user.id),
		user=_login_user(user, first_time=True),
	)


@router.post("/login", response_model=AuthResponse)
async def login(req: CredentialsRequest, db: Session = Depends(get_db)):
	email = validate_email(req.email)
	if not req.password:
		raise ValidationFailed("Password is required")
	user = authenticate_user(db, email, req.password)
	return AuthResponse(
		message="Login successful.",
		token=create_access_token(user.id),
		user=_login_user(user, first_time=not user.display_name),
	)


@router.post("/token", response_model=Token)
async def token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
	user = authenticate_user(db, form_data.username, form_data.password)
	return Token(access_token=create_access_token(user.id))


@router.put("/display-name", response_model=UserResponse)
async def update_display_name(req: DisplayNameRequest, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	name = validate_display_name(req.display_name)
	row = db.get(User, user.id)
	if row is None:
		raise UserNotFound()
	row.display_name = name
	db.commit()
	db.refresh(row)
	return UserResponse(message="Display name updated successfully.", user=UserSummary.model_validate(row))


@router.get("/profile", response_model=ProfileResponse)
async def profile(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	row = db.get(User, user.id)
	if row is None:
		raise UserNotFound()
	return ProfileResponse(
		user=ProfileUser.model_validate(row),
		recent_tasks=[TaskOut.model_validate(t) for t in recent_tasks(db, user.id)],
	)


@router.get("/stats", response_model=HomeStats)
async def home_stats(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
	stats = user_stats(db, user.id)
	return HomeStats(
		total_assigned=stats.total_assigned,
		total_submitted=stats.total_submitted,
		total_approved=stats.total_approved,
		accuracy_rate=percent(stats.total_approved, stats.total_submitted),
	)
