from typing import Dict, Optional

from xmlform.error import BadRequestError, NotFoundError

from . import logger
from .element import FormElement


class FormElementRegistry(object):
    ''' Every element created during a session, by hash, with the pristine
        template each one was built from.

        Elements stay in the registry after they are removed from the tree, so
        their actions can still be looked up when their nodes are retired. The
        processor evicts them once they no longer own a node.
    '''

    def __init__(self):
        self._elements: Dict[str, FormElement] = {}
        self._originals: Dict[str, FormElement] = {}

    def __contains__(self, hash):
        return hash in self._elements

    def __len__(self):
        return len(self._elements)

    def register(self, element: FormElement) -> FormElement:
        ''' Register `element` and its subtree, snapshotting the current state
            of each as its original template.
        '''
        template = element.clone()
        for live, pristine in zip(element.iter(), template.iter()):
            self._add(live, pristine)
        return element

    def _add(self, element: FormElement, template: FormElement):
        if element.hash in self._elements and self._elements[element.hash] is not element:
            raise BadRequestError("F11.301", f"Element hash [{element.hash}] is already registered")

        self._elements[element.hash] = element
        self._originals[element.hash] = template

    def get(self, hash: str) -> FormElement:
        try:
            return self._elements[hash]
        except KeyError:
            raise NotFoundError("F11.401", f"Element [{hash}] is not registered") from None

    def original(self, hash: str) -> FormElement:
        try:
            return self._originals[hash]
        except KeyError:
            raise NotFoundError("F11.402", f"No original template for element [{hash}]") from None

    def duplicate_original(self, hash: str) -> FormElement:
        ''' Build a fresh, detached copy of the template `hash` was built from.
            Every element of the copy gets a new hash and is registered.
        '''
        duplicate = self._instantiate(self.original(hash))
        logger.debug('Duplicated original of [%s] as [%s]', hash, duplicate.hash)
        return duplicate

    def _instantiate(self, template: FormElement) -> FormElement:
        element = template.clone()
        for live, pristine in zip(element.iter(), template.iter()):
            self._add(live, pristine)
        return element

    def find(self, hash: str) -> Optional[FormElement]:
        return self._elements.get(hash)

    def unregister(self, hash: str):
        self._elements.pop(hash, None)
        self._originals.pop(hash, None)

    def hashes(self):
        return list(self._elements)
