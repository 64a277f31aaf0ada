"""
Form Element Actions

An element declares up to four actions, one per ActionKind. Every action
carries an XPath `path` evaluated relative to the node its `context` resolves
to, and exposes:

    should_execute(document, element, value) -> bool
    execute(document, element, value) -> outcome

Actions are registered by kind in ActionRegistry so they can be rebuilt from
plain definition data:

    ActionBundle.from_form({
        'read': {'path': 'mods:name', 'context': 'parent'},
        'create': {'path': None, 'context': 'parent', 'type': 'element', 'value': 'mods:name'},
    })
"""
import enum

from collections.abc import Mapping
from typing import Optional
from xml.sax.saxutils import escape

from xmlform.error import BadRequestError
from xmlform.form import FormProperty
from xmlform.helper import ClassRegistry, is_empty

from . import config, logger
from .context import Context
from .document import is_attribute
from .error import ContextNotFoundError


XML_VALUE_PLACEHOLDER = config.XML_VALUE_PLACEHOLDER


class ActionKind(enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    def __str__(self):
        return self.value


class Action(FormProperty):
    __kind__: Optional[ActionKind] = None

    def __init__(self, path: Optional[str] = None, context="document", schema: Optional[str] = None):
        self.path = path
        self.context = context if isinstance(context, Context) else Context(context)
        self.schema = schema

    def __repr__(self):
        return f"<{self.__class__.__name__} path={self.path!r} context={self.context}>"

    @property
    def kind(self) -> ActionKind:
        return self.__kind__

    def query(self, document, element):
        node = self.context.get_node(document, element)
        return document.query(self.path, node)

    def should_execute(self, document, element, value=None) -> bool:
        return True

    def execute(self, document, element, value=None):
        raise NotImplementedError(f"{self.__class__.__name__}.execute")

    def to_form(self):
        form = {'path': self.path, 'context': str(self.context), 'schema': self.schema}
        return {key: value for key, value in form.items() if value is not None}


ActionRegistry = ClassRegistry(Action)


@ActionRegistry.register(ActionKind.READ.value)
class ReadAction(Action):
    __kind__ = ActionKind.READ

    def __init__(self, path: str, context="parent", schema: Optional[str] = None):
        if not path:
            raise BadRequestError("X04.301", "A read action requires a path")

        super().__init__(path, context, schema)

    def execute(self, document, element, value=None):
        ''' Nodes matched by the path, or an empty list when the context node
            does not exist (yet).
        '''
        try:
            return self.query(document, element)
        except ContextNotFoundError:
            return []


class CreateType(enum.Enum):
    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    XML = "xml"

    def __str__(self):
        return self.value


@ActionRegistry.register(ActionKind.CREATE.value)
class CreateAction(Action):
    ''' Create the node of an element under the node its context (and
        optional path) resolves to. `value` is the name of the created
        element or attribute, or an XML snippet where `%value%` is replaced by
        the submitted value.
    '''
    __kind__ = ActionKind.CREATE

    def __init__(self, path: Optional[str] = None, context="parent", schema: Optional[str] = None,
                 type="element", value: Optional[str] = None, prefix: Optional[str] = None):
        super().__init__(path, context, schema)
        self.type = CreateType(type)
        self.value = value
        self.prefix = prefix

        if not self.value:
            raise BadRequestError("X04.302", f"A create action of type [{self.type}] requires a value")

    def should_execute(self, document, element, value=None) -> bool:
        if document.registry.is_registered(element.hash):
            return False

        if not is_empty(value):
            return True

        # Structural nodes are created when something below them will be.
        return any(
            child.actions is not None and child.actions.create is not None
            for child in element.descendants()
        )

    def execute(self, document, element, value=None) -> bool:
        try:
            parent = self.get_parent(document, element)
        except ContextNotFoundError:
            return False

        if parent is None:
            return False

        node = self.create(document, parent, value)
        document.registry.register(element.hash, node)
        logger.debug('Created %s [%s] for element [%s]', self.type, self.value, element.hash)
        return True

    def get_parent(self, document, element):
        node = self.context.get_node(document, element)
        if self.path:
            nodes = document.query(self.path, node)
            node = nodes[0] if nodes else None
        elif node is None:
            node = document.root

        if node is not None and is_attribute(node):
            raise BadRequestError("X04.303", f"Cannot create a node under attribute [{node.name}]")

        return node

    def create(self, document, parent, value=None):
        if self.type is CreateType.ATTRIBUTE:
            return document.create_attribute(parent, self.value, self.prefix, value)

        if self.type is CreateType.ELEMENT:
            text = value if not is_empty(value) and not isinstance(value, (Mapping, list, tuple)) else None
            return document.create_element(parent, self.value, self.prefix, text)

        text = '' if is_empty(value) else escape(str(value))
        created = document.append_xml(parent, self.value.replace(XML_VALUE_PLACEHOLDER, text))
        if not created:
            raise BadRequestError("X04.304", f"XML snippet [{self.value}] does not contain an element")

        return created[0]

    def to_form(self):
        form = super().to_form()
        form.update(type=str(self.type), value=self.value)
        if self.prefix:
            form['prefix'] = self.prefix
        return form


@ActionRegistry.register(ActionKind.UPDATE.value)
class UpdateAction(Action):
    ''' Push the submitted value into the element's node, or into the nodes
        its path matches relative to the context.
    '''
    __kind__ = ActionKind.UPDATE

    def __init__(self, path: Optional[str] = None, context="self", schema: Optional[str] = None):
        super().__init__(path, context, schema)

    def should_execute(self, document, element, value=None) -> bool:
        return document.registry.is_registered(element.hash)

    def execute(self, document, element, value=None) -> bool:
        if self.path:
            nodes = self.query(document, element)
        else:
            nodes = [document.registry.get(element.hash)]

        for node in nodes:
            document.set_value(node, value)

        return bool(nodes)


@ActionRegistry.register(ActionKind.DELETE.value)
class DeleteAction(Action):
    ''' Remove the element's node from the document.

        Deletion is driven by elements leaving the tree, so the guard is
        false and the processor runs these for removed elements only.
    '''
    __kind__ = ActionKind.DELETE

    def __init__(self, path: Optional[str] = None, context="self", schema: Optional[str] = None):
        super().__init__(path, context, schema)

    def should_execute(self, document, element, value=None) -> bool:
        return False

    def execute(self, document, element, value=None) -> bool:
        if not document.registry.is_registered(element.hash):
            return False

        if self.path:
            nodes = self.query(document, element)
        else:
            nodes = [document.registry.get(element.hash)]

        removed = [document.remove(node) for node in nodes]
        return any(removed)


class ActionBundle(FormProperty):
    ''' The (up to four) actions of an element, one optional slot per kind. '''

    def __init__(self, read=None, create=None, update=None, delete=None):
        self._slots = {
            ActionKind.READ: read,
            ActionKind.CREATE: create,
            ActionKind.UPDATE: update,
            ActionKind.DELETE: delete,
        }

        for kind, action in self._slots.items():
            if action is not None and action.kind is not kind:
                raise BadRequestError("X04.305", f"Action [{action!r}] cannot fill the [{kind}] slot")

    def __iter__(self):
        for kind, action in self._slots.items():
            if action is not None:
                yield kind, action

    def __repr__(self):
        return f"<ActionBundle {[str(kind) for kind, _ in self]}>"

    def get(self, kind: ActionKind):
        return self._slots[ActionKind(kind)]

    @property
    def read(self):
        return self._slots[ActionKind.READ]

    @property
    def create(self):
        return self._slots[ActionKind.CREATE]

    @property
    def update(self):
        return self._slots[ActionKind.UPDATE]

    @property
    def delete(self):
        return self._slots[ActionKind.DELETE]

    def to_form(self):
        return {str(kind): action.to_form() for kind, action in self}

    @classmethod
    def from_form(cls, form: Mapping) -> "ActionBundle":
        actions = {}
        for key, params in form.items():
            kind = ActionKind(key)
            if params is None:
                continue

            if isinstance(params, Action):
                actions[kind.value] = params
            else:
                actions[kind.value] = ActionRegistry.construct(kind.value, **params)

        return cls(**actions)
