from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging
import time
from routinely_core.config import Settings
from routinely_core.db import Base, engine
from routinely_core.logging_config import configure_logging
from .routes import users, routines, schedule, completions, performance

logger = logging.getLogger("routinely_api")

settings = Settings()
configure_logging(settings.log_level)

app = FastAPI(title="Routinely API", version="0.1.0")

# Core middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)

@app.middleware("http")
async def request_logger(request: Request, call_next):
    start = time.time()
    path = request.url.path
    if path.startswith("/health") or path.startswith("/api/health"):
        return await call_next(request)
    response = await call_next(request)
    duration_ms = int((time.time() - start) * 1000)
    logger.info("http %s %s -> %s (%dms)", request.method, path, response.status_code, duration_ms)
    return response

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("http %s %s invalid body errors=%d", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("http %s %s database error", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# Group API routes under /api for frontend expectation, while keeping root mounting for direct calls/scripts.
api_router = APIRouter(prefix="/api")
for module in (users, routines, schedule, completions, performance):
    api_router.include_router(module.router)
    app.include_router(module.router)
app.include_router(api_router)

@app.on_event("startup")
async def on_startup():
    Base.metadata.create_all(bind=engine)
    logger.info("api.start version=%s", app.version)

@app.on_event("shutdown")
async def on_shutdown():
    logger.info("api.stop")

@app.get("/health")
@app.get("/api/health", include_in_schema=False)
async def health():
    return {"status": "ok", "version": app.version}


def run() -> None:  # pragma: no cover
    """Console entry point: serve the API with uvicorn."""
    import os
    import uvicorn

    uvicorn.run(
        "routinely_api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )

__all__ = ["app", "settings", "run"]
