import json
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple


class StatusCode:
    OK = 200
    BAD_REQUEST = 400
    METHOD_NOT_ALLOWED = 405
    PAYLOAD_TOO_LARGE = 413
    INTERNAL_SERVER_ERROR = 500


@dataclass
class _ResponseData:
    status_code: int
    body: bytes
    headers: List[Tuple[bytes, bytes]]


class JsonResponse:

    def __init__(
        self,
        body: Any,
        status_code: int = StatusCode.OK,
        headers: Optional[dict] = None,
        encode: str = "utf-8",
    ):
        if headers is None:
            headers = {}
        assert isinstance(headers, dict), "headers must be a dict"
        assert isinstance(status_code, int), "status_code must be an int"

        self._status_code = status_code
        self._headers = headers
        self._body = body
        self._encode = encode
        self._headers["content-type"] = "application/json"

    def __repr__(self):
        return f"<JsonResponse status_code={self._status_code}>"

    @property
    def status_code(self) -> int:
        return self._status_code

    def get_headers(self) -> dict:
        return self._headers

    def get_body(self) -> bytes:
        if self._body is None:
            return b""
        return json.dumps(self._body).encode(self._encode)

    def _get_bytes_headers(self) -> List[Tuple[bytes, bytes]]:
        headers = []
        for key, value in self._headers.items():
            headers.append((key.encode(self._encode), value.encode(self._encode)))

        return headers

    def render(self) -> _ResponseData:
        body = self.get_body()
        self._headers["content-length"] = str(len(body))
        return _ResponseData(self._status_code, body, self._get_bytes_headers())

    async def send_to(self, send: Callable) -> None:
        """Send this response over an ASGI ``send`` channel."""
        data = self.render()
        await send(
            {
                "type": "http.response.start",
                "status": data.status_code,
                "headers": data.headers,
            }
        )
        await send({"type": "http.response.body", "body": data.body})


def OK_JSONResponse(body: Any = None, headers: Optional[dict] = None) -> JsonResponse:
    return JsonResponse(body, StatusCode.OK, headers)


def ERROR_JSONResponse(
    error_type: str, message: str, status_code: int = StatusCode.BAD_REQUEST
) -> JsonResponse:
    return JsonResponse(
        {"error": {"type": error_type, "message": message}}, status_code
    )
