from .logging_config import SanitarySizingLogger, get_logger

__all__ = ["SanitarySizingLogger", "get_logger"]
