import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from spatial_tracker import config
from spatial_tracker.routes import router

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    config.init_config(resolved)

    app = FastAPI(title="Spatial Tracker")
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
