# run_server.py
import faulthandler
import logging
import os
import sys
from pathlib import Path

# frozen builds keep the crash log beside the executable
BASE_DIR = Path(sys.executable).resolve().parent if getattr(sys, "frozen", False) else Path(__file__).resolve().parent
CRASH_LOG = BASE_DIR / "backoffice_crash.log"

logger = logging.getLogger("backoffice.launcher")


def _attach_crash_log():
    handler = logging.FileHandler(CRASH_LOG, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    # segfaults and hard aborts bypass logging entirely
    faulthandler.enable(handler.stream)


def main():
    _attach_crash_log()
    logger.info("starting backoffice (exe=%s cwd=%s base_dir=%s)", sys.executable, os.getcwd(), BASE_DIR)

    try:
        import uvicorn

        # app import is deferred so import errors land in the crash log
        from app.core.config import APP_HOST, APP_PORT, LOG_LEVEL
        from main import app

        uvicorn.run(app, host=APP_HOST, port=APP_PORT, reload=False, log_level=LOG_LEVEL.lower())
    except Exception:
        logger.exception("backoffice crashed")
        raise


if __name__ == "__main__":
    main()
