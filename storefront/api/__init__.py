# storefront/api/__init__.py
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.api.routers import (
    health,
    auth,
    cart,
    orders,
    products,
    categories,
    sizes,
    reviews,
    info,
)
from storefront.domain.errors import ShopError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


async def shop_error_handler(request, exc: ShopError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ())[1:])
    message = f"{where}: {first.get('msg')}" if where else str(first.get("msg", "Invalid request."))
    return JSONResponse(status_code=400, content={"error": message})


def create_app(lifespan=None) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(orders.router)
    app.include_router(reviews.router)
    app.include_router(info.router)
    app.include_router(sizes.router)
    app.include_router(cart.router)

    return app
