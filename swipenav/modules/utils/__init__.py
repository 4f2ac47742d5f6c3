"""Configuration and logging utilities."""
from .config import Config
from .logger import SwipeLogger, setup_logging

__all__ = ["Config", "SwipeLogger", "setup_logging"]
