"""Transport adapter — turns HTTP requests into dispatcher calls and back.

Every path not claimed by another router lands here. The adapter reads and
parses the body, hands a :class:`DispatchRequest` to the dispatcher and
serializes the result into the ``{"ok": ..., "data"/"error": ...}``
envelope. Anything that escapes the dispatcher becomes a generic 500.
"""

import json
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.application.services import Dispatcher, DispatchRequest, DispatchResult
from app.domain.exceptions import BodyParseError
from app.infrastructure.dependencies import get_dispatcher
from app.infrastructure.logging.colored_logger import RequestLogger

router = APIRouter(tags=["Analytics"])

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_request_log = RequestLogger()


@router.api_route(
    "/{full_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def dispatch(
    request: Request,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    """Dispatch any request to the analytics core."""
    method = request.method.upper()
    path = _raw_path(request)

    try:
        with _request_log.timed_request(method, path) as outcome:
            result = await _handle(request, dispatcher, method, path)
            outcome.status_code = result.status_code
    except Exception:
        # already logged with traceback by the request logger
        result = DispatchResult.fail("Internal server error", 500)

    return render(result)


async def _handle(
    request: Request, dispatcher: Dispatcher, method: str, path: str
) -> DispatchResult:
    body: dict[str, Any] = {}
    if method in _BODY_METHODS:
        try:
            body = await read_json_body(request)
        except BodyParseError as e:
            return DispatchResult.fail(str(e))

    return dispatcher.dispatch(
        DispatchRequest(
            method=method,
            path=path,
            query=dict(request.query_params),
            body=body,
        )
    )


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object; an empty body is ``{}``."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise BodyParseError("Invalid JSON body") from e
    if not isinstance(parsed, dict):
        raise BodyParseError("Request body must be a JSON object")
    return parsed


def render(result: DispatchResult) -> Response:
    """Serialize a dispatch result into the JSON envelope."""
    if result.status_code == 204:
        return Response(status_code=204)
    if result.success:
        content = {"ok": True, "data": jsonable_encoder(result.data)}
    else:
        content = {"ok": False, "error": result.error}
    return JSONResponse(content=content, status_code=result.status_code)


def _raw_path(request: Request) -> str:
    """The undecoded request path, so encoded segments such as ``%23`` survive."""
    raw = request.scope.get("raw_path")
    if raw:
        # some servers include the query string in raw_path
        return raw.split(b"?", 1)[0].decode("latin-1")
    return quote(request.scope["path"])
