# app/main.py

import sys
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from app.core import config
from app.core.exceptions import DuplicateDateConflict

# --- Configure logging FIRST ---
handlers = [logging.StreamHandler(sys.stdout)]
if config.LOG_FILE:
    handlers.append(logging.FileHandler(config.LOG_FILE, mode="a"))

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(name)s:%(levelname)s] %(message)s",
    handlers=handlers,
)

logger = logging.getLogger("daily_tracker")
logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

# Keep uvicorn at the same level
for name in ("uvicorn.error", "uvicorn.access", "fastapi"):
    logging.getLogger(name).setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

logger.info(f"Logging configured at {config.LOG_LEVEL} level")

# --- Routers ---
from app.api.daily_records import router as records_router

# --- Create FastAPI app ---
app = FastAPI(
    title       = "Daily Tracker API",
    version     = "1.0.0",
    description = "Daily record validation and monthly habit analytics"
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    logger.info(f"📥 Incoming request: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"✅ Request completed in {process_time:.3f}s with status {response.status_code}")
    return response

# --- Validation-error handler (logs raw body + errors) ---
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    raw_body = await request.body()
    logger.error(
        f"\n❗️ Validation error for {request.url.path}\n"
        f"Raw JSON was:\n{raw_body.decode('utf-8') if raw_body else 'No body'}\n"
        f"Errors:\n{exc.errors()!r}"
    )
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors())},
    )

# --- Duplicate-date conflict -> 409 ---
@app.exception_handler(DuplicateDateConflict)
async def duplicate_date_handler(request: Request, exc: DuplicateDateConflict):
    logger.info(f"🚫 Rejected duplicate entry for {exc.date}")
    return JSONResponse(
        status_code=409,
        content={"detail": exc.message, "date": exc.date},
    )

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins     = config.CORS_ORIGINS,
    allow_credentials = True,
    allow_methods     = ["*"],
    allow_headers     = ["*"],
)

app.include_router(records_router, tags=["Daily Records"])

# --- Root & health endpoints ---
@app.get("/", tags=["Root"])
async def root():
    return {
        "message": "Welcome to the Daily Tracker API",
        "status":  "online",
        "version": app.version,
        "docs":    "/docs"
    }

@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"📚 API docs available at: http://{config.HOST}:{config.PORT}/docs")
    uvicorn.run("app.main:app", host=config.HOST, port=config.PORT)
