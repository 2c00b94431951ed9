import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from signup_backend.config.settings import settings, Settings
from signup_backend.core.dependencies import AppContext, build_context
from signup_backend.core.errors import ApiError, internal_error
from signup_backend.modules.auth import routes as auth_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, context: Optional[AppContext] = None) -> FastAPI:
    app = FastAPI(
        title=app_settings.app_name,
        debug=app_settings.debug,
        redirect_slashes=False,
    )
    app.state.context = context

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"message": "All fields are required"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        error = internal_error(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_content())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(auth_routes.router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        logger.info("Application startup")
        if app.state.context is None:
            app.state.context = build_context(app_settings)
        try:
            app.state.context.accounts.ping()
        except Exception:
            logger.exception("Credential store is unreachable")
            raise
        logger.info("Connected to credential store")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown")

    return app


app = create_app()


def run() -> None:
    """Start the HTTP listener; exits non-zero if startup fails."""
    import uvicorn

    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
