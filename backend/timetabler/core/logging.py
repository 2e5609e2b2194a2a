from __future__ import annotations

import logging
import logging.handlers

from timetabler.core.config import BACKEND_DIR


def setup_logging(*, environment: str) -> None:
    """Configure application logging.

    Development logs to the console at DEBUG. Production logs at INFO to the
    console and to a rotating file under ``backend/logs``.

    Does nothing when the root logger already has handlers.
    """

    root = logging.getLogger()
    if root.handlers:
        return

    env = (environment or "development").lower().strip()
    level = logging.INFO if env == "production" else logging.DEBUG

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    handlers.append(console)

    if env == "production":
        logs_dir = BACKEND_DIR / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "timetabler.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)

    # Per-subject generator progress is DEBUG noise outside of troubleshooting.
    logging.getLogger("timetabler.services.timetable_generator").setLevel(max(level, logging.INFO))
    logging.getLogger("uvicorn.access").setLevel(level)
