from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.api import cases
from app.config import settings
from casematch import CaseMatchError, close_redis, init_db
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("[backend] CaseMatch backend starting...")
    await init_db()
    logger.info("[backend] Database initialized")
    yield
    # Shutdown
    logger.info("[backend] CaseMatch backend shutting down...")
    await close_redis()


app = FastAPI(
    title="CaseMatch API",
    description="Attorney and case matching",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CaseMatchError)
async def casematch_error_handler(request: Request, exc: CaseMatchError):
    if exc.status_code >= 500:
        logger.error(f"[backend] {request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
async def root():
    return {"message": "CaseMatch API v0.1.0"}


@app.get("/health")
async def health():
    return {"status": "ok"}


# Include routers
app.include_router(cases.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.ENV == "development",
    )
