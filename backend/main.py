from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

from colorio import __version__
from colorio.api.colors import router as colors_router
from colorio.config import config
from colorio.schemas import HealthResponse
from colorio.services.colors import (
    ColorEngineError,
    EmptyImageError,
    ImageDecodeError,
    InvalidColorFormat,
)
from colorio.utils.ids import generate_request_id
from colorio.utils.logging import get_logger
from colorio.utils.metrics import get_metrics

# Load environment variables
load_dotenv()

REQUEST_ID_HEADER = "X-Request-ID"

# HTTP status per engine error type; anything else in the taxonomy is a 400
ERROR_STATUS = {
    InvalidColorFormat: 400,
    ImageDecodeError: 400,
    EmptyImageError: 422,
}

app = FastAPI(
    title="Color.io Palette Service",
    description="Palette extraction and color tooling API",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER]
)

app.include_router(colors_router)


@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    """Tag every request with an id, echoed back in the response headers."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


def _error_response(request: Request, status_code: int, detail: str, code: str) -> JSONResponse:
    get_metrics().increment_failure_count(code)
    get_logger().warning(f"Request failed: {detail}", extra={
        "request_id": _request_id(request),
        "path": request.url.path,
        "status_code": status_code,
        "code": code,
    })
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code, "request_id": _request_id(request)},
    )


@app.exception_handler(ColorEngineError)
async def color_engine_error_handler(request: Request, exc: ColorEngineError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    return _error_response(request, status_code, str(exc), exc.code)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return _error_response(request, 400, str(exc), "invalid_request")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(request, exc.status_code, str(exc.detail), "http_error")


@app.get("/healthz", response_model=HealthResponse)
def healthz():
    """Liveness probe."""
    return {"ok": True, "version": __version__, "service": "colorio-palette"}


@app.get("/")
def root():
    """Service banner with the available endpoints."""
    return {
        "service": "Color.io Palette Service",
        "version": __version__,
        "status": "ok",
        "endpoints": sorted({route.path for route in app.routes if route.path.startswith("/colors")}),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
