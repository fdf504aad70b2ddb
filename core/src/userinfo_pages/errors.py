from __future__ import annotations

import json
from typing import Any

from starlette.responses import Response


class ErrorResponse(Response):
    """JSON error body of the form {"error": "<message>"}.

    Rendered with json.dumps defaults so the separator spacing is stable
    (`{"error": "..."}`), unlike JSONResponse's compact output.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return json.dumps({"error": content}, ensure_ascii=False).encode("utf-8")


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> ErrorResponse:
    return ErrorResponse(content=message, status_code=status_code, headers=headers)
