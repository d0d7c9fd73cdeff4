"""Utils module -- config, logging, text budgeting."""

from src.utils.budgeter import assemble_text
from src.utils.config import settings
from src.utils.logger import get_logger

__all__ = ["assemble_text", "settings", "get_logger"]
