"""
Form Element Tree

A form element is one node of the user editable tree. Each element has a
unique hash, an optional parent, ordered named children and a dictionary of
controls. Control keys start with the control marker (``#``); the actions
bundle of an element lives under the ``#actions`` control.

Usage:
    root = FormElement(controls={'#type': 'fieldset'})
    name = FormElement(controls={'#type': 'textfield', '#title': 'Name'})
    root.adopt(name, 'name')

    for hash, element in root.flatten().items():
        ...
"""
import copy

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional

from xmlform.data.identifier import UUID_GENR
from xmlform.error import BadRequestError, NotFoundError

from . import config


ACCESS_CONTROL = config.ACCESS_CONTROL
ACTIONS_CONTROL = config.ACTIONS_CONTROL


class FormProperty(ABC):
    """ A control value that knows how to convert itself to plain data """

    @abstractmethod
    def to_form(self) -> Any:
        pass


def generate_hash() -> str:
    return UUID_GENR().hex


class FormElement(object):
    def __init__(self, controls: Optional[Dict[str, Any]] = None, children: Optional[Dict[Any, "FormElement"]] = None, hash: Optional[str] = None):
        self.hash = hash or generate_hash()
        self.parent: Optional[FormElement] = None
        self.key = None
        self.controls = dict(controls or {})
        self._children: Dict[Any, FormElement] = {}

        for key, child in (children or {}).items():
            self.adopt(child, key)

    def __repr__(self):
        return f"<FormElement {self.key!r} hash={self.hash}>"

    def __getitem__(self, key):
        try:
            return self._children[key]
        except KeyError:
            raise NotFoundError("F10.401", f"Element [{self.hash}] has no child [{key}]") from None

    def __contains__(self, key):
        return key in self._children

    def __len__(self):
        return len(self._children)

    @property
    def children(self):
        return MappingProxyType(self._children)

    @property
    def actions(self):
        return self.controls.get(ACTIONS_CONTROL)

    @property
    def access(self) -> bool:
        return bool(self.controls.get(ACCESS_CONTROL, True))

    @property
    def root(self) -> "FormElement":
        element = self
        while element.parent is not None:
            element = element.parent
        return element

    def next_key(self):
        indexes = [key for key in self._children if isinstance(key, int)]
        return max(indexes) + 1 if indexes else 0

    def adopt(self, child: "FormElement", key=None):
        ''' Attach `child` under `key` (the next free integer key when omitted)
            and return the key used.
        '''
        if child.parent is not None:
            raise BadRequestError("F10.301", f"Element [{child.hash}] already belongs to [{child.parent.hash}]")

        if key is None:
            key = self.next_key()

        if key in self._children:
            raise BadRequestError("F10.302", f"Element [{self.hash}] already has a child [{key}]")

        child.parent, child.key = self, key
        self._children[key] = child
        return key

    def remove(self, key) -> "FormElement":
        child = self[key]
        del self._children[key]
        child.parent = None
        return child

    def detach(self) -> "FormElement":
        if self.parent is not None:
            self.parent.remove(self.key)
        return self

    def ancestors(self) -> Iterator["FormElement"]:
        parent = self.parent
        while parent is not None:
            yield parent
            parent = parent.parent

    def iter(self) -> Iterator["FormElement"]:
        ''' Pre-order, depth-first walk of the subtree rooted at this element. '''
        stack: List[FormElement] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(list(element._children.values())))

    def descendants(self) -> Iterator["FormElement"]:
        walk = self.iter()
        next(walk)
        yield from walk

    def flatten(self) -> Dict[str, "FormElement"]:
        return {element.hash: element for element in self.iter()}

    def clone(self) -> "FormElement":
        ''' Deep copy of the subtree with fresh hashes. The copy is detached. '''
        duplicate = FormElement(controls=copy.deepcopy(self.controls))
        for key, child in self._children.items():
            duplicate.adopt(child.clone(), key)
        return duplicate
