"""FastAPI application exposing the transaction endpoints."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import BaseRoute

from . import __version__, schemas
from .config import Settings, load_settings
from .database import Database
from .errors import StorageError, TransactionError, ValidationError
from .logging import get_logger
from .repository import TransactionRepository
from .summary import compute_summary

LOG = get_logger(__name__)

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": schemas.ErrorRead},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": schemas.ErrorRead},
}
NOT_FOUND_RESPONSES = {**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": schemas.ErrorRead}}


class RouteOrderError(RuntimeError):
    """Raised when a parameterised route shadows a literal route registered after it."""


def check_route_order(routes: Iterable[BaseRoute]) -> None:
    """Reject route tables where an earlier pattern captures a later literal path.

    ``/transactions/{transaction_id}`` registered before ``/transactions/summary``
    would parse ``summary`` as an id and make the summary route unreachable.
    """

    seen: list = []
    for route in routes:
        methods = getattr(route, "methods", None)
        path = getattr(route, "path", None)
        if not methods or path is None:
            continue
        if "{" not in path:
            for earlier in seen:
                if earlier.methods & methods and earlier.path_regex.match(path):
                    raise RouteOrderError(
                        f"Route {earlier.path} is registered before {path} and would capture it"
                    )
        if "{" in path:
            seen.append(route)


def get_repository(request: Request) -> TransactionRepository:
    return request.app.state.repository


router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "",
    response_model=schemas.TransactionRead,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_transaction(
    transaction_in: schemas.TransactionWrite,
    repository: TransactionRepository = Depends(get_repository),
) -> schemas.TransactionRead:
    transaction = repository.create(**transaction_in.model_dump())
    return schemas.TransactionRead.model_validate(transaction)


@router.get("", response_model=schemas.TransactionList, responses=ERROR_RESPONSES)
def list_transactions(repository: TransactionRepository = Depends(get_repository)) -> schemas.TransactionList:
    return schemas.TransactionList(
        transactions=[schemas.TransactionRead.model_validate(t) for t in repository.get_all()]
    )


# Must stay above the ``{transaction_id}`` routes.
@router.get("/summary", response_model=schemas.SummaryRead, responses=ERROR_RESPONSES)
def get_summary(repository: TransactionRepository = Depends(get_repository)) -> schemas.SummaryRead:
    return compute_summary(repository)


@router.get("/{transaction_id}", response_model=schemas.TransactionRead, responses=NOT_FOUND_RESPONSES)
def get_transaction(
    transaction_id: int,
    repository: TransactionRepository = Depends(get_repository),
) -> schemas.TransactionRead:
    return schemas.TransactionRead.model_validate(repository.get_by_id(transaction_id))


@router.put("/{transaction_id}", response_model=schemas.TransactionRead, responses=NOT_FOUND_RESPONSES)
def update_transaction(
    transaction_id: int,
    transaction_in: schemas.TransactionWrite,
    repository: TransactionRepository = Depends(get_repository),
) -> schemas.TransactionRead:
    transaction = repository.update(transaction_id, **transaction_in.model_dump())
    return schemas.TransactionRead.model_validate(transaction)


@router.delete("/{transaction_id}", response_model=schemas.MessageRead, responses=NOT_FOUND_RESPONSES)
def delete_transaction(
    transaction_id: int,
    repository: TransactionRepository = Depends(get_repository),
) -> schemas.MessageRead:
    repository.delete(transaction_id)
    return schemas.MessageRead(message="Transaction deleted")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": message}``."""

    @app.exception_handler(TransactionError)
    async def _transaction_error(_: Request, exc: TransactionError) -> JSONResponse:
        if isinstance(exc, StorageError):
            LOG.error("Request failed: %s", exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(ValidationError.status_code, _format_validation_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        LOG.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    repository: Optional[TransactionRepository] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API around ``repository``, or one opened from ``settings``."""

    if repository is None:
        settings = settings or load_settings()
        repository = TransactionRepository(Database(settings.database_url))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        repository.database.create_all()
        LOG.info("Transaction store ready at %r", repository.database)
        yield

    app = FastAPI(title="Expense Tracker API", version=__version__, lifespan=lifespan)
    app.state.repository = repository
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health", tags=["system"])
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    check_route_order(app.router.routes)
    return app


__all__ = [
    "RouteOrderError",
    "check_route_order",
    "create_app",
    "get_repository",
    "router",
]
