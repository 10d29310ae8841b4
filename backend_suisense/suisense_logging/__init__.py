"""
Structured logging for Backend SuiSense.

JSON logs with timestamp, level, event_type and tx_digest; secrets masked,
long free text clipped.
Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_suisense.suisense_logging.logger import bind_tx, get_logger

__all__ = ["bind_tx", "get_logger"]
