"""
Action dispatch for the entity endpoints.

Every entity is served by one endpoint; the ``action`` parameter selects the
operation. It is read from a JSON body first, then a form-encoded body, then
the query string. Entity fields may be nested under ``data`` or sent flat.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass
class ActionRequest:
    action: Optional[str]
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def data(self) -> dict[str, Any]:
        """Entity fields: the nested ``data`` object, or the flat parameters"""
        nested = self.params.get("data")
        if isinstance(nested, dict):
            return nested
        return {k: v for k, v in self.params.items() if k not in ("action", "data")}

    def get(self, key: str, default: Any = None) -> Any:
        """Top-level parameter, falling back to the entity fields"""
        if key in self.params:
            return self.params[key]
        return self.data.get(key, default)


async def _read_body(request: Request) -> dict[str, Any]:
    if request.method == "GET":
        return {}

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring malformed JSON body on {request.url.path}: {e}")
        return {}
    return parsed if isinstance(parsed, dict) else {}


async def parse_action_request(request: Request) -> ActionRequest:
    body = await _read_body(request)
    query = dict(request.query_params)

    action = body.get("action") or query.get("action")
    # Body parameters win over query parameters with the same name
    params = {**query, **body}
    return ActionRequest(action=action, params=params)


def envelope(data: Any = None, **extra: Any) -> dict[str, Any]:
    """Successful response body"""
    return {"success": True, "data": data, "error": None, **extra}


def error_envelope(message: str) -> dict[str, Any]:
    return {"success": False, "data": None, "error": message}


ActionHandler = Callable[[ActionRequest], dict[str, Any]]


async def dispatch(request: Request, handlers: dict[str, ActionHandler]):
    """Route a request to the handler registered for its action"""
    action_request = await parse_action_request(request)

    if not action_request.action:
        logger.warning(f"No action parameter provided for {request.method} {request.url.path}")
        return JSONResponse(status_code=422, content=error_envelope("Action parameter is required"))

    handler = handlers.get(action_request.action)
    if handler is None:
        raise ValidationError(f"Invalid action: {action_request.action}", field="action")

    # Services do blocking file I/O
    return await run_in_threadpool(handler, action_request)
