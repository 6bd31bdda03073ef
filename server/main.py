# server/main.py

import logging
import logging.config
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api import users
from core.config import get_settings
from core.errors import AccountError, ValidationError
from database import init_db
from logging_config import get_logging_config


settings = get_settings()

logging.config.dictConfig(get_logging_config(settings.log_level))
logger = logging.getLogger(__name__)

init_db()

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)


@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError):
    """Render account failures as a short message with the error's own status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s rejected (%s): %s",
            request.method, request.url.path, exc.status_code, exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.message}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, fields and path parameters answer like a ValidationError."""
    error = ValidationError()
    details = exc.errors()
    if details:
        first = details[0]
        field = ".".join(
            str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query", "header")
        )
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
        error = ValidationError(message, field=field or None)
    return await account_error_handler(request, error)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=get_logging_config(settings.log_level),
    )
