import logging

uvicorn_logger = logging.getLogger("uvicorn")

app_logger = logging.getLogger("app")
app_logger.setLevel(logging.DEBUG)
app_logger.handlers = uvicorn_logger.handlers
app_logger.propagate = False

from fastapi import FastAPI, HTTPException, status, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import CartServiceError, ErrorKind
from app.api.v1.cart import router as cart_router
from app.api.v1.users import router as users_router

logger = logging.getLogger(__name__)
logger.info("Application startup - logging configured")


ERROR_STATUS_CODES = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


app = FastAPI(
    title=f"{settings.SHOP_NAME} Cart",
    description="Shopping cart and checkout service",
    version="1.0.0",
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.include_router(cart_router)
app.include_router(users_router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.exception_handler(CartServiceError)
async def cart_service_exception_handler(request: Request, exc: CartServiceError):
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[exc.kind],
        content={"detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )
