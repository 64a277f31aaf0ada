"""
Context resolution

A context tells an action which document node its path is relative to:

- document: no reference node, the whole document is the scope.
- parent: the node of the closest ancestor declaring a read or create action.
- self: the node registered for the element itself.
"""
import enum

from .error import ContextError, ContextDefinitionError, ContextNotFoundError


class ContextType(enum.Enum):
    DOCUMENT = "document"
    PARENT = "parent"
    SELF = "self"

    def __str__(self):
        return self.value


class Context(object):
    def __init__(self, type=ContextType.DOCUMENT):
        self.type = ContextType(type)

    def __str__(self):
        return str(self.type)

    def __repr__(self):
        return f"Context({self.type.value!r})"

    def __eq__(self, other):
        return isinstance(other, Context) and other.type is self.type

    def __hash__(self):
        return hash(self.type)

    def exists(self, document, element) -> bool:
        try:
            self.get_node(document, element)
            return True
        except ContextError:
            return False

    def get_node(self, document, element):
        if self.type is ContextType.DOCUMENT:
            return None

        if self.type is ContextType.PARENT:
            return self._get_parent(document, element)

        return self._get_self(document, element)

    def _get_parent(self, document, element):
        for parent in element.ancestors():
            actions = parent.actions
            if actions is None or not (actions.read or actions.create):
                continue

            # The first ancestor declaring a read or create action owns the context.
            if document.registry.is_registered(parent.hash):
                return document.registry.get(parent.hash)

            raise ContextNotFoundError(self.type, element)

        raise ContextDefinitionError(self.type, element)

    def _get_self(self, document, element):
        if document.registry.is_registered(element.hash):
            return document.registry.get(element.hash)

        raise ContextNotFoundError(self.type, element)
