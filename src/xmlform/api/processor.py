from typing import Dict, List

from xmlform.form import FormElement, FormElementRegistry, FormValues

from . import logger
from .action import ActionKind
from .document import XMLDocument, is_attribute


class ProcessAction(object):
    ''' An action bound to the element and value it runs for. '''

    def __init__(self, action, element: FormElement, value=None):
        self.action = action
        self.element = element
        self.value = value

    def __repr__(self):
        return f"<ProcessAction {self.action.kind} element={self.element.hash}>"

    def execute(self, document: XMLDocument):
        return self.action.execute(document, self.element, self.value)


class Processor(object):
    ''' Applies the actions of a submitted form to its document.

        The order of execution matters. Creates run first so the new nodes are
        registered for the updates. Deletes run after the updates so an element
        is flushed to the document before it is retired. The node and element
        registries are cleaned up last, once the document is settled.
    '''

    def __init__(self, values: FormValues, document: XMLDocument, registry: FormElementRegistry):
        self.values = values
        self.document = document
        self.nodes = document.registry
        self.registry = registry

    def process(self, root: FormElement) -> XMLDocument:
        elements = self.filter_elements(root.flatten())
        pending = dict(elements)

        self.create_nodes(self.get_actions(pending, ActionKind.CREATE))
        self.modify_nodes(self.get_actions(pending, ActionKind.UPDATE))
        self.modify_nodes(self.get_actions(pending, ActionKind.DELETE))
        self.modify_nodes(self.get_removed_elements_delete_actions(elements))
        self.cleanup_node_registry(elements)
        self.cleanup_form_registry(root)
        return self.document

    def filter_elements(self, elements: Dict[str, FormElement]) -> Dict[str, FormElement]:
        ''' Drop elements hidden by `#access`, along with everything below them. '''
        hidden = set()
        filtered = {}
        for hash, element in elements.items():
            if not element.access or (element.parent is not None and element.parent.hash in hidden):
                hidden.add(hash)
                continue
            filtered[hash] = element
        return filtered

    def get_actions(self, elements: Dict[str, FormElement], kind: ActionKind) -> List[ProcessAction]:
        ''' Select the actions of `kind` that should run. Selected elements are
            removed from `elements`: an element runs a single kind per pass.
        '''
        actions = []
        for hash, element in list(elements.items()):
            bundle = element.actions
            action = bundle.get(kind) if bundle is not None else None
            if action is None:
                continue

            value = self.values.get_value(hash)
            if action.should_execute(self.document, element, value):
                actions.append(ProcessAction(action, element, value))
                del elements[hash]

        return actions

    def create_nodes(self, actions: List[ProcessAction]):
        ''' Creates may depend on nodes created later in the list, so the list
            is scanned until a full scan creates nothing.
        '''
        pending = list(actions)
        progress = True
        while pending and progress:
            progress = False
            for action in list(pending):
                if action.execute(self.document):
                    pending.remove(action)
                    progress = True

        for action in pending:
            logger.debug('Dropped unresolved create action %r', action)

    def modify_nodes(self, actions: List[ProcessAction]):
        for action in actions:
            action.execute(self.document)

    def get_removed_elements_delete_actions(self, elements: Dict[str, FormElement]) -> List[ProcessAction]:
        ''' Delete actions for registered elements that are no longer in the form. '''
        actions = []
        for hash in self.nodes.get_registered():
            if hash in elements:
                continue

            element = self.registry.find(hash)
            bundle = element.actions if element is not None else None
            if bundle is not None and bundle.delete is not None:
                actions.append(ProcessAction(bundle.delete, element))

        return actions

    def cleanup_node_registry(self, elements: Dict[str, FormElement]):
        ''' Unregister nodes whose elements left the form: attributes of
            detached elements, and elements retired by a delete action together
            with all of their descendants.
        '''
        for hash, node in self.nodes.get_registered().items():
            if hash in elements or not self.nodes.is_registered(hash):
                continue

            if is_attribute(node):
                if not self.document.is_attached(node.owner):
                    self.nodes.unregister(hash)
                continue

            element = self.registry.find(hash)
            bundle = element.actions if element is not None else None
            if bundle is None or bundle.delete is None:
                continue

            for descendant_hash in element.flatten():
                self.nodes.unregister(descendant_hash)

    def cleanup_form_registry(self, root: FormElement):
        ''' Forget the elements that left the tree and no longer own a node. '''
        present = root.flatten()
        for hash in self.registry.hashes():
            if hash not in present and not self.nodes.is_registered(hash):
                self.registry.unregister(hash)
                logger.debug('Evicted element [%s]', hash)
