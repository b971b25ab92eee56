# utils/__init__.py

from utils.logger import logger, configure_logging
from utils.config import load_cfg

__all__ = ["logger", "configure_logging", "load_cfg"]
