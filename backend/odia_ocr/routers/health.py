from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
	return {"status": "ok", "gemini_configured": getattr(request.app.state, "gemini", None) is not None}
