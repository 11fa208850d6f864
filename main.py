from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.middleware.logging_md import LoggingMiddleware
from framework.middleware.validation_md import QueryValidationMiddleware
from framework.logging.logger import LogConfig, get_logger
from framework.exceptions.errors import ModelValidationException
from framework.exceptions.handler import global_exception_handler
from apps.catalog.api.categories import router as categories_router
from apps.catalog.api.products import router as products_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = DatabaseManager.get_instance()
    await db.sql.connect()
    if settings.DB_CREATE_ALL:
        await db.sql.create_all()
    logger.info(f"{settings.APP_NAME} started | Provider: {settings.DB_PROVIDER.value} | Env: {settings.APP_ENV}")
    yield
    await DatabaseManager.shutdown()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Initialize logging configuration
LogConfig.setup_logging()

# Register global exception handlers
app.add_exception_handler(ModelValidationException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Last added runs first: logging wraps query validation
app.add_middleware(QueryValidationMiddleware)
app.add_middleware(LoggingMiddleware)

# Mount routers (prefix from config for easy override)
app.include_router(
    categories_router,
    prefix=settings.API_CATEGORIES_PREFIX,
    tags=["Categories"]
)

app.include_router(
    products_router,
    prefix=settings.API_PRODUCTS_PREFIX,
    tags=["Products"]
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
