from ._meta import config, logger
from .element import FormElement, FormProperty, generate_hash
from .registry import FormElementRegistry
from .values import FormValues

__all__ = [
    "config", "logger",
    "FormElement", "FormElementRegistry", "FormProperty", "FormValues",
    "generate_hash",
]
