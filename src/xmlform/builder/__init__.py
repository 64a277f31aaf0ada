from ._meta import config, logger
from .source import DeclarativeFormSource, FormSource, empty_definition, is_definition, parse_definition
from .database import FormDatabase
from .repository import FormRepository

__all__ = [
    "config", "logger",
    "DeclarativeFormSource", "FormDatabase", "FormRepository", "FormSource",
    "empty_definition", "is_definition", "parse_definition",
]
