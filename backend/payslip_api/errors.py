from fastapi import Request
from fastapi.responses import JSONResponse


class ValidationFailed(Exception):
    """Client input violated one or more field constraints."""

    def __init__(self, details: list[dict]):
        super().__init__("Validation failed")
        self.details = details


class NotFound(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OperationError(Exception):
    """Storage or rendering failure. ``message`` is safe to show to clients."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def error_body(error: str, details: list | None = None) -> dict:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body


async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content=error_body("Validation failed", exc.details))


async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content=error_body(exc.message))


async def operation_error_handler(request: Request, exc: OperationError):
    return JSONResponse(status_code=500, content=error_body(exc.message))
