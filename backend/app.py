import logging
from pathlib import Path

from fastapi import FastAPI

from backend.routes import router
from storyweaver.config import Settings, load_settings
from storyweaver.pipeline import TurnController
from storyweaver.storage import JsonFileStore

logger = logging.getLogger(__name__)


def create_app(data_dir: Path | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    resolved = data_dir or settings.data_dir
    store = JsonFileStore(resolved)

    controller = TurnController(store, settings=settings)
    if controller.load():
        logger.info("Restored saved session turn=%d", controller.state.turn)

    app = FastAPI(title="Storyweaver")
    app.state.controller = controller
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses STORYWEAVER_DATA_DIR or ./data)
app = create_app()
