# guestbook/app/main.py
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from guestbook.core.config import Settings, load_settings
from guestbook.core.exceptions import GuestbookError, StartupConfigError
from guestbook.core.templating import load_templates
from guestbook.app.routers import guestbook
from guestbook.app.exception_handlers import guestbook_exception_handler, general_exception_handler, http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(f"[lifespan] frontend server listening on port {settings.PORT} (backend: {settings.GUESTBOOK_API_ADDR})")
    yield
    logger.info("[lifespan] Shutdown complete")

def create_app(settings: Settings = None) -> FastAPI:
    """
    설정과 컴파일된 템플릿을 app.state에 올린 FastAPI 앱을 만듭니다.
    둘 다 기동 이후에는 읽기 전용입니다.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Guestbook Frontend",
        description="Renders guestbook messages fetched from the guestbook backend API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_url=None, # /docs 등도 404 처리
    )
    app.state.settings = settings
    app.state.templates = load_templates()

    app.add_exception_handler(GuestbookError, guestbook_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"status": "ok"}

    # Prometheus Metrics (Expose /metrics)
    Instrumentator().instrument(app).expose(app, include_in_schema=False)

    # "/{path:path}" fallback을 포함하므로 가장 마지막에 등록
    app.include_router(guestbook.router)
    return app

def run():
    try:
        settings = load_settings()
    except StartupConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.critical(e.message)
        sys.exit(1)

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=settings.LOG_LEVEL.upper()
    )

    try:
        app = create_app(settings)
    except StartupConfigError as e:
        logger.critical(e.message)
        sys.exit(1)

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
