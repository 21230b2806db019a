"""Response writer — buffered, write-once response state for one request.

Handlers receive a ``ResponseWriter`` alongside the request. They can
set headers, write a body directly, and return a ``Status``; the
dispatcher then calls ``write_status()`` with whatever the handler
returned. The writer guarantees only the first status reaches the
client::

    def show_item(request, writer):
        writer.write_json({"id": request.path_params["id"]})
        return OK            # ignored: the body is already written

Nothing is sent until ``finish()``, which emits exactly one ASGI
response (``http.response.start`` plus a single body message).
"""

import json
import logging
from typing import Any

from wren._internal.asgi import Send
from wren.http.headers import ResponseHeaders
from wren.status import OK, Status

logger = logging.getLogger("wren.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # 1xx, 204 and 304 responses carry no message body.
    return not (100 <= status < 200 or status in {204, 304})


class ResponseWriter:
    """Per-request response state.

    Attributes:
        headers: Response headers, mutable until ``finish()``.
        status_code: The status line, once ``write_header()`` ran.
        header_written: A status line has been recorded.
        body_written: At least one body write happened.
        status_written: ``write_status()`` has already taken effect.
    """

    __slots__ = (
        "_baseline",
        "_chunks",
        "_finished",
        "_send",
        "body_written",
        "header_written",
        "headers",
        "status_code",
        "status_written",
    )

    def __init__(self, send: Send) -> None:
        self._send = send
        self._chunks: list[bytes] = []
        self._baseline: dict[str, str] = {}
        self._finished = False
        self.headers = ResponseHeaders()
        self.status_code: int | None = None
        self.header_written = False
        self.body_written = False
        self.status_written = False

    # -- Direct writes --

    def write_header(self, code: int) -> None:
        """Record the status line. Only the first call counts."""
        if self.header_written:
            logger.warning(
                "Superfluous write_header(%d); status %d already written",
                code,
                self.status_code,
            )
            return
        self.status_code = code
        self.header_written = True

    def write(self, data: bytes | str) -> int:
        """Append *data* to the body, writing a 200 status line if needed.

        Returns the number of bytes written.
        """
        if self._finished:
            msg = "Response already sent."
            raise RuntimeError(msg)
        if not self.header_written:
            self.write_header(200)
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._chunks.append(chunk)
        self.body_written = True
        return len(chunk)

    def write_json(self, obj: Any) -> int:
        """Encode *obj* as compact JSON and append it to the body."""
        return self.write(json.dumps(obj, separators=(",", ":")))

    # -- Write-once status --

    def write_status(self, status: Status | None) -> None:
        """Write *status* as the response unless one was already written.

        A no-op when a previous ``write_status()`` took effect or the body
        was written directly. ``None`` means ``OK``. ``NoContent`` writes
        only the status line (as does any other bodiless code).
        """
        if self.status_written or self.body_written:
            return
        if status is None:
            status = OK
        self.status_written = True

        if not self.header_written:
            self.write_header(status.code)
        if _body_allowed(status.code):
            self.write(status.to_json())

    def set_baseline(self) -> None:
        """Record the current headers as the ones ``discard()`` restores."""
        self._baseline = dict(self.headers)

    def discard(self) -> None:
        """Drop the buffered status line and body.

        Headers go back to the ``set_baseline()`` snapshot, so nothing a
        handler set (``Content-Length``, ``Location``) outlives the
        discarded response.
        """
        self.headers.clear()
        self.headers.update(self._baseline)
        self._chunks.clear()
        self.status_code = None
        self.header_written = False
        self.body_written = False
        self.status_written = False

    # -- Inspection --

    @property
    def body(self) -> bytes:
        """The buffered body."""
        return b"".join(self._chunks)

    @property
    def finished(self) -> bool:
        return self._finished

    # -- Sending --

    async def finish(self) -> None:
        """Send the response through ASGI. Idempotent."""
        if self._finished:
            return
        self._finished = True

        status = self.status_code if self.status_code is not None else 200
        body = self.body if _body_allowed(status) else b""
        if "content-length" not in self.headers and _body_allowed(status):
            self.headers["Content-Length"] = str(len(body))

        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": self.headers.encode(),
            }
        )
        await self._send({"type": "http.response.body", "body": body})
