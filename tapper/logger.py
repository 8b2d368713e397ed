# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Tapper."""
import logging

logger: logging.Logger = logging.getLogger("tapper")
