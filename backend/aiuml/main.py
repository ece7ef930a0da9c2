import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from aiuml.api.routes import router
from aiuml.config import CORS_ORIGINS, LOG_LEVEL
from aiuml.db.models import Base
from aiuml.db.session import engine
from aiuml.errors import ConfigurationError, ProjectNotFoundError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_tables(retries: int = 5, delay: float = 2) -> bool:
    for attempt in range(retries):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database connected")
            return True
        except OperationalError:
            logger.warning("Waiting for database... (%d/%d)", attempt + 1, retries)
            time.sleep(delay)

    # Keep serving generation endpoints without persistence
    logger.error("Database not ready - running without persistence")
    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    yield


app = FastAPI(
    title="AI UML Architect",
    version="0.1.0",
    lifespan=lifespan,
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


@app.exception_handler(ConfigurationError)
def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=503, content={"status": "error", "message": str(exc)})


@app.exception_handler(ProjectNotFoundError)
def project_not_found_handler(request: Request, exc: ProjectNotFoundError):
    return JSONResponse(status_code=404, content={"status": "error", "message": str(exc)})
