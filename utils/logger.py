# utils/logger.py
from loguru import logger
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

STDOUT_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | {level} | {extra[component]} | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[component]} | {message}"

logger.remove()
logger.configure(extra={"component": "-"})

_stdout_id = logger.add(
    sys.stdout,
    level=(os.getenv("COMMERCE_LOG_LEVEL") or "INFO").upper(),
    enqueue=True,
    format=STDOUT_FORMAT,
)
_file_id: Optional[int] = None


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> Optional[Path]:
    """
    Re-register the stdout sink at `level`; with `log_dir`, also write a
    rotating DEBUG log file there. Returns the log file path, if any.
    """
    global _stdout_id, _file_id

    logger.remove(_stdout_id)
    _stdout_id = logger.add(sys.stdout, level=level.upper(), enqueue=True, format=STDOUT_FORMAT)

    if _file_id is not None:
        logger.remove(_file_id)
        _file_id = None
    if not log_dir:
        return None

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    log_file = path / f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    _file_id = logger.add(
        log_file,
        level="DEBUG",
        rotation="100 MB",
        retention="90 days",
        enqueue=True,
        encoding="utf-8",
        format=FILE_FORMAT,
    )
    logger.info(f"Logger initialized. Writing logs to {log_file}")
    return log_file
