import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from app.api.v1.api_router import api_router
from app.core.config import Settings, settings as default_settings, BASE_DIR
from app.core.exceptions import RentalAppError, StoreFailure
from app.core.stores import open_store_context

logger = logging.getLogger(__name__)

# Optional frontend served next to the API
STATIC_DIR = BASE_DIR / "public"


def _serializable_validation_errors(errors: list) -> list:
    """Convert validation error dicts to JSON-serializable form (e.g. ctx may contain Exception)."""
    out = []
    for e in errors:
        item = {"type": e.get("type"), "loc": e.get("loc"), "msg": e.get("msg")}
        if "ctx" in e and e["ctx"]:
            item["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
        out.append(item)
    return out


async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error("Store failure: method=%s path=%s error=%s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def rental_app_error_handler(request: Request, exc: RentalAppError):
    logger.info(
        "Request rejected %s: method=%s path=%s message=%s",
        exc.status_code,
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"sucesso": False, "mensagem": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "message": "Validation error",
            "errors": _serializable_validation_errors(exc.errors()),
        },
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors_serializable = _serializable_validation_errors(exc.errors())
    logger.info(
        "Validation error 422: method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        errors_serializable,
    )
    return JSONResponse(
        status_code=422,
        content={
            "message": "Validation error",
            "errors": errors_serializable,
        },
    )


async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


def create_app(settings: Optional[Settings] = None, static_dir: Optional[Path] = STATIC_DIR) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with open_store_context(settings) as stores:
            app.state.stores = stores
            logger.info("Vehicle rental API started (environment=%s)", settings.ENVIRONMENT)
            yield

    app = FastAPI(
        title="Vehicle Rental API",
        description="Backend API for vehicle, client and rental management",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Handlers are matched on the most specific class: StoreFailure renders as {"error"}, other RentalAppErrors as {"sucesso", "mensagem"}
    app.add_exception_handler(StoreFailure, store_failure_handler)
    app.add_exception_handler(RentalAppError, rental_app_error_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(HTTPException, custom_http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include API router (must be before static so the API takes precedence)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    if static_dir is not None and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=default_settings.HOST, port=default_settings.PORT)
