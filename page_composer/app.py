"""
PAGE_COMPOSER — FastAPI app
Démarrer : uvicorn page_composer.app:app --reload --port 8002
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")

    app = FastAPI(title="PAGE_COMPOSER — Composition de pages", version=__version__, docs_url="/docs")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    from .router import router
    app.include_router(router)

    @app.on_event("startup")
    def startup():
        from .storage import init_db
        init_db()
        log.info("DB templates initialisée (SQLite)")

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "page_composer", "version": __version__}

    return app


app = create_app()
