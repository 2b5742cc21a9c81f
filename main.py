import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from self_olympics.core.config import settings
from self_olympics.core.security import limiter
from self_olympics.database.database import init_database
from self_olympics.routers import country, health, leaderboard, registration
from self_olympics.utils.error_handler import SelfOlympicsError, self_olympics_error_handler
from self_olympics.utils.self_verifier import init_verifier

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="Country registrations verified with Self identity proofs, and the leaderboard they feed.",
    version=settings.VERSION,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(SelfOlympicsError, self_olympics_error_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Invalid request body",
            "details": [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()],
        },
    )


@app.on_event("startup")
def startup_event():
    """
    Builds the connection pool and the identity verifier once,
    before any request is served.
    """
    app.state.database = init_database(settings)
    app.state.verifier = init_verifier(settings)
    logger.info("Self Olympics API started")


@app.on_event("shutdown")
async def shutdown_event():
    await app.state.verifier.aclose()
    app.state.database.dispose()
    logger.info("Connection pool and verifier client closed")


# Adding CORS middleware for cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

for prefix in ("", "/api"):
    app.include_router(leaderboard.router, prefix=prefix, tags=["Leaderboard"], include_in_schema=prefix == "")
    app.include_router(registration.router, prefix=prefix, tags=["Registration"], include_in_schema=prefix == "")
    app.include_router(country.router, prefix=prefix, tags=["Countries List"], include_in_schema=prefix == "")
    app.include_router(health.router, prefix=prefix, tags=["Health"], include_in_schema=prefix == "")


# Root endpoint
@app.get("/")
def read_root():
    return {"message": "Welcome to the Self Olympics API"}
