import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from self_olympics.core.security import CORS_HEADERS

logger = logging.getLogger(__name__)

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.options("/test", include_in_schema=False)
def options_test():
    return JSONResponse(content={}, headers=CORS_HEADERS)


@router.get("/test")
def get_test():
    logger.info("Test endpoint hit")
    return JSONResponse(
        content={"message": "Backend is working!", "timestamp": _timestamp()},
        headers=CORS_HEADERS,
    )


@router.post("/test")
def post_test():
    logger.info("Test POST endpoint hit")
    return JSONResponse(
        content={"message": "POST is working!", "timestamp": _timestamp()},
        headers=CORS_HEADERS,
    )
