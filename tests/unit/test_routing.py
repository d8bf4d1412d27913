from __future__ import annotations

import pytest
from fastapi import APIRouter, FastAPI

from expense_tracker.server import RouteOrderError, check_route_order, create_app


def test_summary_is_registered_before_id_routes(repository):
    app = create_app(repository=repository)
    paths = [route.path for route in app.router.routes if getattr(route, "methods", None)]
    assert paths.index("/transactions/summary") < paths.index("/transactions/{transaction_id}")


def test_summary_registered_after_id_route_is_rejected():
    router = APIRouter(prefix="/transactions")

    @router.get("/{transaction_id}")
    def get_transaction(transaction_id: int) -> dict:
        return {"id": transaction_id}

    @router.get("/summary")
    def get_summary() -> dict:
        return {}

    app = FastAPI()
    app.include_router(router)
    with pytest.raises(RouteOrderError, match="/transactions/summary"):
        check_route_order(app.router.routes)


def test_different_methods_do_not_conflict():
    router = APIRouter(prefix="/transactions")

    @router.delete("/{transaction_id}")
    def delete_transaction(transaction_id: int) -> dict:
        return {}

    @router.get("/summary")
    def get_summary() -> dict:
        return {}

    app = FastAPI()
    app.include_router(router)
    check_route_order(app.router.routes)
