import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from routers import health, recommend
from utils.transport import close_client

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level.upper())


configure_logging(settings.log_level)

app = FastAPI(title="Relocation Advisor", version="0.1.0")

app.state.limiter = recommend.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405 and request.url.path == recommend.RECOMMEND_PATH:
        return recommend.method_not_allowed()
    return await http_exception_handler(request, exc)


# CORS preflights are answered here and never reach the 405 handler
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(recommend.router)


@app.get("/")
async def root():
    return {
        "name": "Relocation Advisor API",
        "version": "0.1.0",
        "endpoints": ["/health", "/api/recommend"],
    }


@app.on_event("startup")
async def startup():
    logger.info("Relocation Advisor API is running")


@app.on_event("shutdown")
async def shutdown():
    await close_client()
