import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .cleanup import purge_orphaned_uploads
from .db import SessionLocal, init_db
from .errors import OcrServiceError, Unauthenticated
from .gemini_client import GeminiClient
from .routers import auth, health, ocr
from .settings import settings
from .storage import URL_PREFIX, ImageStore
from .transliteration import TransliterationEngine


def configure_logging() -> None:
	level = getattr(logging, settings.log_level.upper(), logging.INFO)
	root = logging.getLogger("odia_ocr")
	root.setLevel(level)
	if not root.handlers:
		handler = logging.StreamHandler(sys.stdout)
		handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s %(message)s"))
		root.addHandler(handler)


configure_logging()
logger = logging.getLogger("odia_ocr.api")


def _error_body(request: Request, error_code: str, message: str, detail=None) -> dict:
	body = {"error_code": error_code, "error_message": message, "path": request.url.path}
	if detail is not None:
		body["detail"] = detail
	return body


async def service_error_handler(request: Request, exc: OcrServiceError):
	log = logger.info if exc.status_code < 500 else logger.warning
	log("request_failed status=%s path=%s error_code=%s", exc.status_code, request.url.path, exc.error_code)
	headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
	return JSONResponse(
		status_code=exc.status_code,
		content=_error_body(request, exc.error_code, exc.message),
		headers=headers,
	)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
	logger.info("request_failed_validation status=422 path=%s", request.url.path)
	detail = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
	return JSONResponse(
		status_code=422,
		content=_error_body(request, "VALIDATION_ERROR", "Request validation failed", detail),
	)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
	code = "RESOURCE_NOT_FOUND" if exc.status_code == 404 else f"HTTP_{exc.status_code}"
	return JSONResponse(
		status_code=exc.status_code,
		content=_error_body(request, code, str(exc.detail)),
		headers=getattr(exc, "headers", None),
	)


async def unhandled_exception_handler(request: Request, exc: Exception):
	logger.exception("request_failed_unhandled path=%s error=%s", request.url.path, exc.__class__.__name__)
	detail = f"{exc.__class__.__name__}: {exc}" if settings.debug else None
	return JSONResponse(
		status_code=500,
		content=_error_body(request, "INTERNAL_SERVER_ERROR", "An unexpected error occurred on the server.", detail),
	)


def create_app() -> FastAPI:
	app = FastAPI(title="Odia OCR Correction API")
	app.add_exception_handler(OcrServiceError, service_error_handler)
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)
	app.add_exception_handler(Exception, unhandled_exception_handler)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origins(),
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	app.include_router(health.router)
	app.include_router(auth.router)
	app.include_router(ocr.router)

	app.state.gemini = None
	app.state.images = ImageStore(settings.upload_dir)
	app.state.transliteration = None

	# Uploaded images; the directory is created on startup
	app.mount(URL_PREFIX, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

	@app.on_event("startup")
	async def startup_event():
		init_db()
		app.state.images.ensure_root()
		if settings.gemini_api_key:
			app.state.gemini = GeminiClient()
		else:
			logger.warning("gemini_not_configured uploads will fail until GEMINI_API_KEY is set")
		app.state.transliteration = TransliterationEngine.from_settings(settings)
		db = SessionLocal()
		try:
			purge_orphaned_uploads(db, app.state.images)
		except Exception:
			logger.exception("orphan_purge_failed")
		finally:
			db.close()

	@app.on_event("shutdown")
	async def shutdown_event():
		if app.state.gemini is not None:
			await app.state.gemini.aclose()
		if app.state.transliteration is not None:
			await app.state.transliteration.aclose()

	return app


app = create_app()
