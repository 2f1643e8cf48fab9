import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models
from .config import LOG_LEVEL
from .database import engine
from .errors import (
    NotFound,
    OperationError,
    ValidationFailed,
    error_body,
    not_found_handler,
    operation_error_handler,
    validation_failed_handler,
)
from .routers import employees, payslips

# Ensure application logs show informative messages
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s:%(name)s:%(message)s"
)
logger = logging.getLogger(__name__)

models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Payslip Generator API")

app.add_exception_handler(ValidationFailed, validation_failed_handler)
app.add_exception_handler(NotFound, not_found_handler)
app.add_exception_handler(OperationError, operation_error_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"][1:])
        # undecodable JSON is reported against the whole body, not a character offset
        if err["type"] == "json_invalid" or not field:
            field = "body"
        details.append({"field": field, "message": err["msg"]})
    return JSONResponse(status_code=400, content=error_body("Validation failed", details))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)), headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


app.include_router(employees.router, prefix="/employees", tags=["employees"])
app.include_router(payslips.router, prefix="/payslips", tags=["payslips"])


@app.get("/")
def read_root():
    return {"message": "Payslip Generator API"}


@app.get("/health")
def health():
    return {"ok": True}
