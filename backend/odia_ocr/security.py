from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from .errors import Unauthenticated
from .settings import settings

logging.getLogger('passlib').setLevel(logging.ERROR)
logger = logging.getLogger("odia_ocr.auth")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error=False so a missing header is reported as its own reason
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


class CurrentUser(BaseModel):
	id: str


def _bcrypt_safe(password: str) -> str:
	# bcrypt only looks at the first 72 bytes
	password_bytes = password.encode('utf-8')
	if len(password_bytes) > 72:
		password_bytes = password_bytes[:72]
	return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
	return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
	return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


def _resolve_expiry(expires_delta: Optional[timedelta]) -> datetime:
	delta = expires_delta
	if delta is None:
		minutes = settings.access_token_expire_minutes
		delta = timedelta(minutes=minutes) if minutes > 0 else timedelta(days=7)
	now = datetime.now(timezone.utc)
	try:
		return now + delta
	except OverflowError:
		return datetime.max.replace(tzinfo=timezone.utc)


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
	to_encode = {"sub": user_id, "exp": _resolve_expiry(expires_delta)}
	return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: Optional[str]) -> CurrentUser:
	"""Resolve a bearer token to the caller's identity.

	Raises Unauthenticated with a reason that tells the client whether the
	token was missing, expired or otherwise unusable.
	"""
	if not token:
		raise Unauthenticated(Unauthenticated.MISSING)
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
	except ExpiredSignatureError:
		raise Unauthenticated(Unauthenticated.EXPIRED)
	except JWTError as err:
		logger.info("token_rejected error=%s", err)
		raise Unauthenticated(Unauthenticated.INVALID)
	user_id = payload.get("sub")
	if not isinstance(user_id, str) or not user_id:
		raise Unauthenticated(Unauthenticated.INVALID)
	return CurrentUser(id=user_id)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> CurrentUser:
	return decode_access_token(token)
