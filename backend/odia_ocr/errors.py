from __future__ import annotations


class OcrServiceError(Exception):
	"""Base for failures that are translated into an HTTP response at the API boundary."""

	status_code = 500
	error_code = "INTERNAL_SERVER_ERROR"
	message = "Internal server error"

	def __init__(self, message: str | None = None, *, error_code: str | None = None, status_code: int | None = None) -> None:
		self.message = message or self.message
		if error_code is not None:
			self.error_code = error_code
		if status_code is not None:
			self.status_code = status_code
		super().__init__(self.message)


class Unauthenticated(OcrServiceError):
	status_code = 401
	error_code = "AUTH_INVALID_TOKEN"
	message = "Invalid or malformed token."

	MISSING = "AUTH_MISSING_TOKEN"
	EXPIRED = "AUTH_TOKEN_EXPIRED"
	INVALID = "AUTH_INVALID_TOKEN"
	BAD_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"

	_MESSAGES = {
		MISSING: "Access denied. No token provided.",
		EXPIRED: "Token has expired.",
		INVALID: "Invalid or malformed token.",
		BAD_CREDENTIALS: "Invalid email or password.",
	}

	def __init__(self, reason: str = INVALID) -> None:
		self.reason = reason
		super().__init__(self._MESSAGES.get(reason), error_code=reason)


class ValidationFailed(OcrServiceError):
	status_code = 400
	error_code = "VALIDATION_ERROR"
	message = "Invalid input."


class EmailAlreadyRegistered(OcrServiceError):
	status_code = 409
	error_code = "EMAIL_EXISTS"
	message = "User already exists."


class UserNotFound(OcrServiceError):
	status_code = 404
	error_code = "USER_NOT_FOUND"
	message = "User not found."


class TaskNotFound(OcrServiceError):
	# Also raised for tasks owned by someone else so existence is never confirmed
	status_code = 404
	error_code = "TASK_NOT_FOUND"
	message = "Task not found or not assigned to you."


class NoTaskAvailable(OcrServiceError):
	status_code = 404
	error_code = "NO_TASK_AVAILABLE"
	message = "No tasks available for assignment at this time."


class InvalidTransition(OcrServiceError):
	status_code = 409
	error_code = "STATE_CONFLICT"
	message = "Task is not in a state that allows this operation."


class UploadRejected(OcrServiceError):
	status_code = 400
	error_code = "UPLOAD_REJECTED"
	message = "Only image files are allowed."


class ExtractionFailed(OcrServiceError):
	status_code = 502
	error_code = "EXTRACTION_FAILED"
	message = "Failed to extract text from the image."
