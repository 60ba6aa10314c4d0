"""Routes de santé (sonde du reverse proxy et de la supervision)."""

from datetime import datetime, timezone

from fastapi import APIRouter, Response

router = APIRouter()


@router.get("/health", include_in_schema=False)
def health() -> Response:
    return Response(status_code=200)


@router.get("/api/health")
def api_health() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
