from typing import Any, Optional


def create_response(
    success: bool,
    message: str,
    data: Any = None,
    meta: Optional[dict] = None,
) -> dict:
    """Standard `{success, message, data, meta}` envelope."""
    response = {
        "success": success,
        "message": message,
    }

    if data is not None:
        response["data"] = data

    if meta is not None:
        response["meta"] = meta

    return response
