"""Error kinds and the shared error envelope.

The core raises `InvalidArgument`; the MQTT service turns it into an
`ErrorResponse` message so remote callers see the same code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class InvalidArgument(ValueError):
    """Raised for inputs the queue time calculation refuses (e.g. zero tills)."""

    code = "invalid_argument"


@dataclass(frozen=True)
class ErrorResponse:
    code: str
    message: str

    @classmethod
    def from_exception(cls, exc: InvalidArgument) -> "ErrorResponse":
        return cls(exc.code, str(exc))

    def to_message(self, *, corr_id: str | None = None) -> dict[str, Any]:
        msg: dict[str, Any] = {"type": "error", "code": self.code, "message": self.message}
        if corr_id is not None:
            msg["corr_id"] = corr_id
        return msg
