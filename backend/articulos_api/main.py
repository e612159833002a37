import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from articulos_api.api.health import router as health_router
from articulos_api.api.routes_articulos import router as articulos_router
from articulos_api.api.routes_listas import router as listas_router
from articulos_api.config import settings
from articulos_api.db import check_connection, engine, init_db
from articulos_api.log_config import configure_logging
from articulos_api.services.errors import describe

log = logging.getLogger(__name__)

DOCS_URL = "/api-docs"

TAGS = [
    {"name": "Artículos", "description": "Article management"},
    {"name": "Listas", "description": "Price lists"},
    {"name": "health", "description": "Service and database status"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    configure_logging(settings.LOG_LEVEL)
    try:
        check_connection(engine)
        log.info("Database connection verified (%s)", engine.url.get_backend_name())
        init_db(engine, reset=settings.RESET_DB)
    except SQLAlchemyError as e:
        # keep serving; /health reports the outage
        log.error("Could not reach the database: %s", describe(e))
    log.info("Documentation available at %s", DOCS_URL)
    try:
        yield
    finally:
        engine.dispose()


app = FastAPI(
    title="Articles API",
    version="1.0.0",
    description="REST API for articles and price lists",
    contact={"name": "API Support", "email": "support@example.com"},
    openapi_tags=TAGS,
    docs_url=DOCS_URL,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # malformed bodies, paths and query strings are client errors (400), not 422
    return JSONResponse(
        status_code=400, content={"detail": jsonable_encoder(exc.errors())}
    )


app.include_router(health_router)

app.include_router(articulos_router, prefix="/api/articulos", tags=["Artículos"])

app.include_router(listas_router, prefix="/api/listas", tags=["Listas"])


@app.get("/", summary="API index", include_in_schema=False)
def index():
    return {
        "message": "Articles API is running",
        "documentation": DOCS_URL,
        "endpoints": {"articulos": "/api/articulos", "listas": "/api/listas"},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run():
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
