"""Loyalty Points - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from loyalty.core.config import Settings, get_settings
from loyalty.core.errors import InternalError, LoyaltyError, ValidationError
from loyalty.core.security import PasswordHasher
from loyalty.db.base import Base
from loyalty.db.session import build_engine, build_sessionmaker
from loyalty.routers import api, auth, web

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or ValidationError.default_message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LoyaltyError)
    async def loyalty_error_handler(request: Request, exc: LoyaltyError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationError(_validation_message(exc))
        return JSONResponse(err.to_dict(), status_code=err.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        err = InternalError()
        return JSONResponse(err.to_dict(), status_code=err.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        err = InternalError()
        return JSONResponse(err.to_dict(), status_code=err.status_code)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around one Settings instance shared by every component."""
    settings = settings or get_settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info(f"{settings.app_name} ready")
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Customers collect points; merchants scan loyalty codes to credit them.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(api.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    if settings.static_dir is not None:
        if settings.static_dir.is_dir():
            app.include_router(web.build_router(settings.static_dir))
        else:
            logger.warning(f"static_dir {settings.static_dir} does not exist; client not served")

    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
