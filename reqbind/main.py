import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reqbind.api.errors import register_error_handlers
from reqbind.api.health import router as health_router
from reqbind.api.root import router as root_router
from reqbind.api.search import router as search_router
from reqbind.api.users import router as users_router
from reqbind.core.config import settings


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Request Binding Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(users_router)
app.include_router(search_router)

logger.info(f"Request binding service ready (env={settings.APP_ENV})")
