"""HTTP API for URL and phone safety checks.

Run:
    uvicorn cyberfort.api:app --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from cyberfort.bootstrap import initialize
from cyberfort.config import settings
from cyberfort.dependencies import init_app
from cyberfort.exceptions import (
    InvalidInput,
    StorageFailure,
    UpstreamUnavailable,
)

from .errors import (
    exception_middleware,
    invalid_input_handler,
    storage_error_handler,
    upstream_error_handler,
    validation_error_handler,
)
from .routes import api_router, router
from .schemas import PhoneCheckResponse, UrlCheckResponse

app = FastAPI(title="CyberFort Safety Checker API", version="1.0")
init_app(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
app.include_router(api_router)


@app.on_event("startup")
async def startup_event() -> None:
    initialize()


app.add_exception_handler(InvalidInput, invalid_input_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(UpstreamUnavailable, upstream_error_handler)
app.add_exception_handler(StorageFailure, storage_error_handler)
app.middleware("http")(exception_middleware)

__all__ = [
    "app",
    "PhoneCheckResponse",
    "UrlCheckResponse",
]
