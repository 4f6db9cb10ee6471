"""
ASGI helpers for feeding request bodies to the multipart parser.

    uvicorn formslice.asgi:app
"""

import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional

from formslice.config import ParserConfig
from formslice.exceptions import BodyTooLargeException, MultipartException
from formslice.parser import MultipartParser
from formslice.records import FileRecords
from formslice.responses import ERROR_JSONResponse, JsonResponse, OK_JSONResponse, StatusCode

logger = logging.getLogger(__name__)

Receive = Callable[[], Awaitable[Dict[str, Any]]]


async def read_body(receive: Receive, max_body_size: Optional[int] = None) -> bytes:
    """
    Receive the complete HTTP request body from the ASGI receive callable.

    Handles bodies that arrive in several http.request messages.

    Raises:
        BodyTooLargeException: If more than max_body_size bytes arrive
    """
    body_parts: List[bytes] = []
    received = 0
    while True:
        message = await receive()
        if message["type"] == "http.request":
            body_part = message.get("body", b"")
            if body_part:
                received += len(body_part)
                if max_body_size is not None and received > max_body_size:
                    raise BodyTooLargeException(
                        f"Request body exceeds the limit of {max_body_size} bytes."
                    )
                body_parts.append(body_part)
            if not message.get("more_body", False):
                break
        elif message["type"] == "http.disconnect":
            break
    return b"".join(body_parts)


def get_content_type(scope: Dict[str, Any]) -> str:
    """Content-Type header of an ASGI scope, or an empty string."""
    for name, value in scope.get("headers", []):
        if name.decode("latin-1").lower() == "content-type":
            return value.decode("latin-1")
    return ""


async def parse_request(
    scope: Dict[str, Any],
    receive: Receive,
    config: Optional[ParserConfig] = None,
    parser: Optional[MultipartParser] = None,
) -> FileRecords:
    """Read the whole request body and parse it as multipart/form-data."""
    config = config or ParserConfig()
    parser = parser or MultipartParser()
    body = await read_body(receive, config.max_body_size)
    return parser.parse(body, get_content_type(scope))


class UploadInspectorApp:
    """
    ASGI application that answers every POST with a JSON summary of its multipart sections.

    Response body on success:
        {"count": 2, "records": [{"field_name": ..., "filename": ..., "content_type": ..., "size": ...}, ...]}

    On a parse failure the status code comes from the error and the body is:
        {"error": {"type": "TerminatorNotFound", "message": "..."}}
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.parser = MultipartParser()

    async def __call__(self, scope: Dict[str, Any], receive: Callable, send: Callable):
        if scope["type"] == "http":
            await self._handle_http(scope, receive, send)
        elif scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
        else:
            # For non-HTTP protocols, just close the connection
            await send({"type": "websocket.close", "code": 1000})

    async def _handle_lifespan(self, receive: Callable, send: Callable):
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def _handle_http(self, scope: Dict[str, Any], receive: Callable, send: Callable):
        request_id = uuid.uuid4().hex
        extra = {"request_id": request_id}

        if scope.get("method", "GET").upper() != "POST":
            response = ERROR_JSONResponse(
                "MethodNotAllowed",
                "Only POST requests are accepted.",
                StatusCode.METHOD_NOT_ALLOWED,
            )
            response.get_headers()["allow"] = "POST"
            await response.send_to(send)
            return

        try:
            records = await parse_request(scope, receive, self.config, self.parser)
            response = self._records_response(records)
            logger.info("Parsed %d multipart record(s)", len(records), extra=extra)
        except MultipartException as exc:
            logger.info("Rejected upload: %s: %s", exc.kind.value, exc.message, extra=extra)
            response = exc.http_response
        except Exception:
            logger.exception("Unexpected error while parsing upload", extra=extra)
            response = ERROR_JSONResponse(
                "InternalServerError",
                "Internal Server Error",
                StatusCode.INTERNAL_SERVER_ERROR,
            )

        response.get_headers()["x-request-id"] = request_id
        await response.send_to(send)

    @staticmethod
    def _records_response(records: FileRecords) -> JsonResponse:
        return OK_JSONResponse({"count": len(records), "records": records.describe()})


app = UploadInspectorApp()
