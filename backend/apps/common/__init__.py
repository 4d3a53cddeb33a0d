from .logger import AppLogger, get_logger, session_ref

__all__ = ["AppLogger", "get_logger", "session_ref"]
