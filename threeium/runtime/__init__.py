from .logging import LOGGER_NAME, JsonFormatter, setup_logger
from .settings import ClusterSettings

__all__ = [
    "ClusterSettings",
    "JsonFormatter",
    "LOGGER_NAME",
    "setup_logger",
]
