from http import HTTPStatus

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import flow, health, source
from db.sessions import async_engine
from exceptions import BaseError, InternalError

app = FastAPI(title="Flows API")


logfire.configure(send_to_logfire="if-token-present")
logfire.instrument_fastapi(app=app)
logfire.instrument_sqlalchemy(engine=async_engine)
logfire.instrument_redis()
logfire.instrument_httpx()

app.add_middleware(
    middleware_class=CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(exc_class_or_status_code=BaseError)
async def exception_handler(request: Request, exc: BaseError) -> JSONResponse:
    """Exception handler.

    Args:
        request: The request.
        exc: The exception.

    Returns:
        The JSON response.

    """
    return JSONResponse(content={"detail": exc.message}, status_code=exc.status_code)


@app.exception_handler(exc_class_or_status_code=RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors with the common error envelope.

    Args:
        request: The request.
        exc: The validation exception.

    Returns:
        The JSON response with status 400.

    """
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(content={"detail": message}, status_code=HTTPStatus.BAD_REQUEST)


@app.exception_handler(exc_class_or_status_code=Exception)
async def internal_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logfire.exception(
        "Unhandled error on {method} {path}",
        _exc_info=exc,
        method=request.method,
        path=request.url.path,
    )
    error = InternalError()
    return JSONResponse(
        content={"detail": error.message}, status_code=error.status_code
    )


app.include_router(router=health.router)
app.include_router(router=source.router)
app.include_router(router=flow.router)
