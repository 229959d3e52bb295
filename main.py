from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, load_settings
from context import AppContext
from database import build_engine, create_db_and_tables
from logging_setup import setup_logging
from repositories.task_repository import TaskRepository
from repositories.user_repository import UserRepository
from routes import tasks, users
from services.result import INTERNAL_ERROR_MESSAGE
from services.task_service import TaskService
from services.user_service import UserService
from utils.jwt import JwtService
from utils.passwords import PasswordHasher

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Configuration snapshot; read from the environment when omitted

    Raises:
        ValueError: If required configuration is missing
    """
    if settings is None:
        settings = load_settings()

    setup_logging(settings.log_level)
    context = AppContext.create(settings)
    logger = context.get_logger("api")

    engine = build_engine(settings.default_connection, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create database tables on startup"""
        create_db_and_tables(engine)
        logger.info("Task Manager API started (auth %s)", "enabled" if settings.auth_enabled else "disabled")
        yield
        engine.dispose()

    # Create FastAPI app
    app = FastAPI(
        title="Task Manager API",
        description="RESTful API for managing tasks and users",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.context = context
    app.state.engine = engine
    app.state.task_service = TaskService(TaskRepository(engine, context), context)
    app.state.user_service = UserService(UserRepository(engine, context), PasswordHasher(), context)
    app.state.jwt_service = (
        JwtService(settings.jwt, context.get_logger("auth")) if settings.jwt else None
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            logger.info("%s %s -> %d", request.method, request.url.path, 500)
            raise
        logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected malformed request %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": INTERNAL_ERROR_MESSAGE},
        )

    # Include routers
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(users.router, tags=["users"])

    @app.get("/")
    def read_root():
        """Root endpoint"""
        return {
            "message": "Task Manager API is running",
            "version": VERSION,
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=8000)
