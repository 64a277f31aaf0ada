from ._meta import config, logger
from .action import (
    Action, ActionBundle, ActionKind, ActionRegistry,
    CreateAction, CreateType, DeleteAction, ReadAction, UpdateAction,
)
from .context import Context, ContextType
from .datadef import FormProperties
from .definition import DefinitionGenerator
from .document import XMLAttribute, XMLDocument, is_attribute
from .error import ContextError, ContextDefinitionError, ContextNotFoundError
from .generator import Generator
from .processor import Processor
from .registry import NodeRegistry
from .xmlform import XMLForm, build_element

__all__ = [
    "config", "logger",
    "Action", "ActionBundle", "ActionKind", "ActionRegistry",
    "CreateAction", "CreateType", "DeleteAction", "ReadAction", "UpdateAction",
    "Context", "ContextType", "ContextError", "ContextDefinitionError", "ContextNotFoundError",
    "DefinitionGenerator", "FormProperties", "Generator", "NodeRegistry", "Processor",
    "XMLAttribute", "XMLDocument", "XMLForm", "build_element", "is_attribute",
]
