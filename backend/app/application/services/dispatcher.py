"""Request dispatcher — maps (method, path, query, body) onto store operations.

Routing is expressed as a static, ordered table of :class:`Route` templates.
A template segment written ``{name}`` captures exactly one path segment and
``{name:path}`` captures the remainder of the path, slashes included.
Captured values are URL-decoded before use. The first route whose method and
template both match wins, so static templates are listed ahead of the
parametric ones that share their prefix.

The dispatcher never raises for domain errors: every outcome is returned as
a :class:`DispatchResult`.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar
from urllib.parse import unquote

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.application.interfaces import RecordStore
from app.application.schemas import (
    MetricResponse,
    MetricUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    RevenueCreate,
    RevenueResponse,
    RevenueUpdate,
    TransactionCreate,
    TransactionQuery,
    TransactionResponse,
    TransactionUpdate,
)
from app.application.services.metrics_recalculator import MetricsRecalculator
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# Pydantic error types that mean "a required field is absent or empty"
_REQUIRED_ERROR_TYPES = frozenset({"missing", "string_too_short"})


@dataclass(frozen=True)
class DispatchRequest:
    """A normalized request handed over by the transport layer."""

    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DispatchResult:
    """Tagged success/failure outcome of a dispatched request."""

    success: bool
    status_code: int = 200
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any, status_code: int = 200) -> "DispatchResult":
        return cls(success=True, status_code=status_code, data=data)

    @classmethod
    def fail(cls, error: str, status_code: int = 400) -> "DispatchResult":
        return cls(success=False, status_code=status_code, error=error)


Handler = Callable[["Dispatcher", dict[str, str], DispatchRequest], DispatchResult]


@dataclass(frozen=True)
class Route:
    """One entry of the routing table."""

    method: str
    template: str
    handler: Handler

    def match(self, method: str, path: str) -> dict[str, str] | None:
        """Return the decoded path parameters if this route matches, else None."""
        if method != self.method:
            return None

        template_parts = self.template.split("/")
        path_parts = path.split("/")
        params: dict[str, str] = {}

        for index, part in enumerate(template_parts):
            if part.startswith("{") and part.endswith("}"):
                name, _, kind = part[1:-1].partition(":")
                if kind == "path":
                    rest = "/".join(path_parts[index:])
                    if not rest:
                        return None
                    params[name] = unquote(rest)
                    return params
                if index >= len(path_parts) or not path_parts[index]:
                    return None
                params[name] = unquote(path_parts[index])
            elif index >= len(path_parts) or path_parts[index] != part:
                return None

        if len(path_parts) != len(template_parts):
            return None
        return params


def normalize_path(path: str) -> str:
    """Drop a single trailing slash."""
    return path[:-1] if path.endswith("/") else path


def parse_payload(schema: type[M], payload: Mapping[str, Any], required_message: str | None = None) -> M:
    """Validate and coerce a loosely-typed payload into ``schema``.

    Raises:
        ValidationError: With ``required_message`` when a required field is
            absent or empty, otherwise with a description of the first
            offending fields.
    """
    try:
        return schema.model_validate(dict(payload))
    except PydanticValidationError as exc:
        errors = exc.errors()
        if required_message and any(e["type"] in _REQUIRED_ERROR_TYPES for e in errors):
            raise ValidationError(required_message) from exc
        described = "; ".join(
            f"{'.'.join(str(p) for p in e['loc']) or 'body'}: {e['msg']}" for e in errors
        )
        raise ValidationError(described) from exc


class Dispatcher:
    """Routes normalized requests to record store operations."""

    def __init__(self, store: RecordStore, recalculator: MetricsRecalculator | None = None):
        self._store = store
        self._recalculator = recalculator or MetricsRecalculator(store)

    def dispatch(self, request: DispatchRequest) -> DispatchResult:
        method = request.method.upper()
        path = normalize_path(request.path)

        for route in self.ROUTES:
            params = route.match(method, path)
            if params is None:
                continue
            logger.debug("%s %s matched %s", method, path, route.template)
            try:
                return route.handler(self, params, request)
            except ValidationError as e:
                return DispatchResult.fail(str(e))
            except DuplicateEntityError as e:
                return DispatchResult.fail(str(e))
            except EntityNotFoundError as e:
                return DispatchResult.fail(str(e), 404)

        return DispatchResult.fail(f"{method} {path} not found", 404)

    @classmethod
    def route_table(cls) -> list[tuple[str, str]]:
        """(method, template) pairs in matching order."""
        return [(r.method, r.template) for r in cls.ROUTES]

    # ── Metrics ──────────────────────────────────────────────────────

    def _list_metrics(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        metrics = self._recalculator.recompute()
        return DispatchResult.ok({
            name: MetricResponse.model_validate(m, from_attributes=True)
            for name, m in metrics.items()
        })

    def _update_metric(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        key = params["key"]
        # existence first: an unknown key is 404 whatever the payload
        self._store.get_metric(key)
        patch = parse_payload(MetricUpdate, request.body)
        metric = self._store.update_metric(key, patch)
        return DispatchResult.ok(MetricResponse.model_validate(metric, from_attributes=True))

    # ── Revenue ──────────────────────────────────────────────────────

    def _list_revenue(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        return DispatchResult.ok([
            RevenueResponse.model_validate(r, from_attributes=True)
            for r in self._store.list_revenue()
        ])

    def _create_revenue(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        data = parse_payload(RevenueCreate, request.body, "month and revenue required")
        entry = self._store.create_revenue(data)
        return DispatchResult.ok(RevenueResponse.model_validate(entry, from_attributes=True), 201)

    def _update_revenue(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        patch = parse_payload(RevenueUpdate, request.body)
        entry = self._store.update_revenue(params["month"], patch)
        return DispatchResult.ok(RevenueResponse.model_validate(entry, from_attributes=True))

    def _delete_revenue(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        entry = self._store.delete_revenue(params["month"])
        return DispatchResult.ok(RevenueResponse.model_validate(entry, from_attributes=True))

    # ── Products ─────────────────────────────────────────────────────

    def _list_products(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        return DispatchResult.ok([
            ProductResponse.model_validate(p, from_attributes=True)
            for p in self._store.list_products()
        ])

    def _create_product(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        data = parse_payload(ProductCreate, request.body, "name and sales required")
        product = self._store.create_product(data)
        return DispatchResult.ok(ProductResponse.model_validate(product, from_attributes=True), 201)

    def _update_product(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        patch = parse_payload(ProductUpdate, request.body)
        product = self._store.update_product(params["id"], patch)
        return DispatchResult.ok(ProductResponse.model_validate(product, from_attributes=True))

    def _delete_product(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        product = self._store.delete_product(params["id"])
        return DispatchResult.ok(ProductResponse.model_validate(product, from_attributes=True))

    # ── Transactions ─────────────────────────────────────────────────

    def _list_transactions(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        query = parse_payload(TransactionQuery, request.query)
        return DispatchResult.ok([
            TransactionResponse.model_validate(t, from_attributes=True)
            for t in self._store.list_transactions(query)
        ])

    def _create_transaction(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        data = parse_payload(
            TransactionCreate, request.body, "customer, product, and amount required"
        )
        txn = self._store.create_transaction(data)
        self._recalculator.apply_transaction_side_effect(txn)
        return DispatchResult.ok(TransactionResponse.model_validate(txn, from_attributes=True), 201)

    def _update_transaction(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        patch = parse_payload(TransactionUpdate, request.body)
        txn = self._store.update_transaction(params["id"], patch)
        return DispatchResult.ok(TransactionResponse.model_validate(txn, from_attributes=True))

    def _delete_transaction(self, params: dict[str, str], request: DispatchRequest) -> DispatchResult:
        txn = self._store.delete_transaction(params["id"])
        return DispatchResult.ok(TransactionResponse.model_validate(txn, from_attributes=True))

    # ── Routing table ────────────────────────────────────────────────

    ROUTES: tuple[Route, ...] = (
        Route("GET", "/api/metrics", _list_metrics),
        Route("PUT", "/api/metrics/{key}", _update_metric),
        Route("GET", "/api/revenue", _list_revenue),
        Route("POST", "/api/revenue", _create_revenue),
        Route("PUT", "/api/revenue/{month:path}", _update_revenue),
        Route("DELETE", "/api/revenue/{month:path}", _delete_revenue),
        Route("GET", "/api/products", _list_products),
        Route("POST", "/api/products", _create_product),
        Route("PUT", "/api/products/{id:path}", _update_product),
        Route("DELETE", "/api/products/{id:path}", _delete_product),
        Route("GET", "/api/transactions", _list_transactions),
        Route("POST", "/api/transactions", _create_transaction),
        Route("PUT", "/api/transactions/{id:path}", _update_transaction),
        Route("DELETE", "/api/transactions/{id:path}", _delete_transaction),
    )
