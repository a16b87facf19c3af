import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .database import get_db
from .domain.appointments.router import router as appointments_router
from .domain.clients.router import router as clients_router
from .domain.incomes.router import router as incomes_router
from .domain.services.router import router as services_router
from .domain.staff.router import router as staff_router
from .exceptions import SalonError
from .shared.actions import error_envelope

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        get_db().initialize()
        logger.info(f"Data directory ready: {config.DATA_DIR}")
    except OSError as e:
        # Stores initialise lazily on first access, so startup can continue
        logger.error(f"Failed to initialise data directory {config.DATA_DIR}: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Salon Manager API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(SalonError)
async def salon_error_handler(request: Request, exc: SalonError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} - {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.message))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content=error_envelope("Invalid request"))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} - Unhandled error: {exc}")
    return JSONResponse(status_code=500, content=error_envelope("Internal server error"))


# CORS Configuration
logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(clients_router)
app.include_router(staff_router)
app.include_router(services_router)
app.include_router(appointments_router)
app.include_router(incomes_router)


@app.get("/")
def root():
    return {"message": "Salon Manager API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
