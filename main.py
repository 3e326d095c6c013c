"""Application entry point for the Calorie Tracker API.

Defines the FastAPI app, request logging, exception handlers and the API
routers. The `lifespan` handler creates the database schema on startup.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from api.food_logs import router as food_logs_router
from api.goals import router as goals_router
from api.nutrition import router as nutrition_router
from api.users import router as users_router
from core.error_handlers import register_exception_handlers
from core.exceptions import DatabaseError
from core.logger import get_logger
from database import init_db
from database.deps import get_db_read

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables before serving requests."""
    init_db()
    yield


app = FastAPI(title="Calorie Tracker API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If the database cannot be reached.
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("Health check failed")
        raise DatabaseError("Database health check failed", operation="health_check") from exc
    return {"status": "healthy", "database": "connected"}


app.include_router(goals_router)
app.include_router(nutrition_router)
app.include_router(users_router)
app.include_router(food_logs_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
