import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from marketplace.core.config import settings
from marketplace.core.responses import validation_exception_handler
from marketplace.routers import banners, categories, coupons, events, news, regions, stores

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

OPENAPI_TAGS = [
    {"name": "Coupons", "description": "Read coupons and manage them from the admin pages."},
    {"name": "Stores", "description": "Read stores, update them and analyze their regions."},
    {"name": "Categories", "description": "Read store and coupon categories."},
    {"name": "Regions", "description": "Read regions and affiliate networks."},
    {"name": "Banners", "description": "Read home page banners."},
    {"name": "Events", "description": "Read promotional events."},
    {"name": "News", "description": "Read news articles."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Coupon and deals marketplace API. "
        "Browse stores, categories and coupon codes, and manage them from the admin pages."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "*")
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


app.include_router(coupons.router, prefix="/api/coupons", tags=["Coupons"])
app.include_router(stores.router, prefix="/api/stores", tags=["Stores"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(regions.router, prefix="/api/regions", tags=["Regions"])
app.include_router(banners.router, prefix="/api/banners", tags=["Banners"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(news.router, prefix="/api/news", tags=["News"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
