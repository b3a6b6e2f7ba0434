import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from config import get_settings
from errors import register_exception_handlers
from workouts_api import router as workouts_api_router

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Workout Server", version="1.0.0")

register_exception_handlers(app)


@app.middleware("http")
async def log_internal_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled exception during request: %s %s", request.method, request.url
        )
        raise


# Include routers
app.include_router(workouts_api_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Workout Server"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
