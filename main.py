"""Storyweaver: dev launcher. Starts the API server in watch mode."""

import argparse
import logging
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = int(os.getenv("BACKEND_PORT", "13013"))


def main():
    parser = argparse.ArgumentParser(description="Storyweaver dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Session storage directory (default: ./data)")
    parser.add_argument("--fresh", action="store_true",
                        help="Delete the saved session before starting")
    parser.add_argument("--no-reload", action="store_true",
                        help="Disable auto-reload")
    args = parser.parse_args()

    from storyweaver.config import load_settings
    settings = load_settings(ROOT / ".env")
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Subprocess reloader re-imports backend.app, so hand the data dir over via env
    if args.data_dir:
        os.environ["STORYWEAVER_DATA_DIR"] = str(args.data_dir.resolve())

    if args.fresh:
        from storyweaver.storage import SESSION_KEY, JsonFileStore
        JsonFileStore(args.data_dir or settings.data_dir).delete(SESSION_KEY)

    print(f"Starting backend on http://localhost:{BACKEND_PORT} ...")
    uvicorn.run(
        "backend.app:app",
        host=HOST,
        port=BACKEND_PORT,
        reload=not args.no_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
