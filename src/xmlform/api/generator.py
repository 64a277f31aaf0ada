from typing import List

from xmlform.form import FormElement, FormElementRegistry

from . import logger
from .document import XMLDocument


class Generator(object):
    ''' Binds the nodes of an existing document to the elements of a form.

        When the read action of an element matches several nodes, the element
        binds to the first one and a duplicate of its original template is
        appended to the same parent for every other node.
    '''

    def __init__(self, registry: FormElementRegistry, document: XMLDocument):
        self.registry = registry
        self.document = document
        self.nodes = document.registry

    def generate(self, root: FormElement) -> List[FormElement]:
        ''' Walk `root` depth first and return the duplicates created. '''
        created = []
        stack = [root]
        while stack:
            element = stack.pop()
            if self.nodes.is_registered(element.hash):
                stack.extend(reversed(list(element.children.values())))
                continue

            matched, duplicates = self.process_element(element)
            created.extend(duplicates)

            if matched or element.actions is None or element.actions.read is None:
                stack.extend(reversed(list(element.children.values())))

            # Duplicates are bound already; their subtrees are resolved before the walk resumes.
            for duplicate in reversed(duplicates):
                stack.extend(reversed(list(duplicate.children.values())))

        return created

    def process_element(self, element: FormElement):
        ''' Register `element` to the first node its read action finds and
            duplicate it for the others. Returns (matched, duplicates).
        '''
        if self.nodes.is_registered(element.hash):
            return False, []

        nodes = self.find_nodes(element)
        if not nodes:
            return False, []

        node, *others = nodes
        self.nodes.register(element.hash, node)

        if others and element.parent is None:
            logger.warning('Root element [%s] matched %d nodes, only the first is bound', element.hash, len(nodes))
            return True, []

        duplicates = self.create_duplicates(element, len(others))
        for duplicate, other in zip(duplicates, others):
            self.nodes.register(duplicate.hash, other)

        return True, duplicates

    def find_nodes(self, element: FormElement) -> List:
        actions = element.actions
        reader = actions.read if actions is not None else None
        if reader is None:
            return []

        return list(reader.execute(self.document, element))

    def create_duplicates(self, element: FormElement, count: int) -> List[FormElement]:
        output = []
        for _ in range(count):
            clone = self.registry.duplicate_original(element.hash)
            element.parent.adopt(clone)
            output.append(clone)

        if output:
            logger.debug('Duplicated element [%s] %d time(s)', element.hash, count)
        return output
