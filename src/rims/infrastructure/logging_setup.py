from __future__ import annotations

import logging
import logging.handlers

from rims.infrastructure.settings import Settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure the root logger once: stderr, plus a rotating file if configured."""
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())
    fmt = logging.Formatter(_FORMAT)

    if not any(getattr(h, "_rims", False) for h in root.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(fmt)
        stream.setLevel(logging.WARNING)
        stream._rims = True  # type: ignore[attr-defined]
        root.addHandler(stream)

    if settings.log_file is not None:
        log_path = settings.log_file.expanduser()
        already = any(
            isinstance(h, logging.handlers.RotatingFileHandler)
            and getattr(h, "baseFilename", "") == str(log_path.resolve())
            for h in root.handlers
        )
        if not already:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
            )
            handler.setFormatter(fmt)
            root.addHandler(handler)
