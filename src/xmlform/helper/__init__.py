from .genutil import camel_to_lower, is_empty, natural_key
from .registry import ClassRegistry

__all__ = ("camel_to_lower", "is_empty", "natural_key", "ClassRegistry")
