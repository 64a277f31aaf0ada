"""
XMLForm

One synchronization session over a form and its document:

    form = XMLForm.from_form({
        '#actions': {'read': {'path': '/people', 'context': 'document'}},
        'person': {
            '#type': 'fieldset',
            '#actions': {
                'read': {'path': 'person', 'context': 'parent'},
                'create': {'context': 'parent', 'value': 'person'},
                'delete': {},
            },
            'name': {...},
        },
    }, XMLDocument.from_string(xml))

    form.initialize()                 # bind existing nodes, expand repeats
    document = form.submit(values)    # push submitted values to the document
"""
from collections.abc import Mapping
from typing import Optional

from xmlform.error import BadRequestError
from xmlform.form import FormElement, FormElementRegistry, FormValues
from xmlform.form import config as form_config

from . import logger
from .action import ActionBundle
from .document import XMLDocument
from .generator import Generator
from .processor import Processor


CONTROL_MARKER = form_config.CONTROL_MARKER
ACTIONS_CONTROL = form_config.ACTIONS_CONTROL


def build_element(form: Mapping) -> FormElement:
    ''' Build an element tree from a nested mapping: keys starting with the
        control marker are controls, every other key is a child slot.
    '''
    def _build(data):
        controls, children = {}, {}
        for key, value in data.items():
            if isinstance(key, str) and key.startswith(CONTROL_MARKER):
                controls[key] = value
            elif isinstance(value, Mapping):
                children[key] = value
            else:
                raise BadRequestError("X05.301", f"Child [{key}] must be a mapping, got [{type(value).__name__}]")

        actions = controls.get(ACTIONS_CONTROL)
        if isinstance(actions, Mapping):
            controls[ACTIONS_CONTROL] = ActionBundle.from_form(actions)

        return FormElement(controls=controls), children

    root, children = _build(form)
    stack = [(root, children)]
    while stack:
        element, children = stack.pop()
        for key, data in children.items():
            child, grandchildren = _build(data)
            element.adopt(child, key)
            stack.append((child, grandchildren))

    return root


class XMLForm(object):
    def __init__(self, root: FormElement, document: XMLDocument, registry: Optional[FormElementRegistry] = None):
        self.root = root
        self.document = document
        self.registry = registry or FormElementRegistry()
        self.initialized = False

        if root.hash not in self.registry:
            self.registry.register(root)

    @classmethod
    def from_form(cls, form: Mapping, document: XMLDocument, registry: Optional[FormElementRegistry] = None):
        return cls(build_element(form), document, registry)

    def initialize(self):
        ''' Bind the document nodes to the form, once per session. '''
        if self.initialized:
            return []

        duplicates = Generator(self.registry, self.document).generate(self.root)
        self.initialized = True
        logger.info('Initialized form [%s] with %d duplicate(s)', self.root.hash, len(duplicates))
        return duplicates

    def get(self, hash: str) -> FormElement:
        return self.registry.get(hash)

    def duplicate(self, hash: str) -> FormElement:
        ''' Add a repeat of the element `hash` next to it. '''
        element = self.registry.get(hash)
        if element.parent is None:
            raise BadRequestError("X05.302", f"Element [{hash}] has no parent to repeat under")

        clone = self.registry.duplicate_original(hash)
        element.parent.adopt(clone)
        return clone

    def remove(self, hash: str) -> FormElement:
        ''' Take the element `hash` out of the form; its node is retired on submit. '''
        return self.registry.get(hash).detach()

    def values(self, submitted: Mapping) -> FormValues:
        return FormValues.from_submission(self.root, submitted)

    def current_values(self) -> FormValues:
        ''' The values the document holds for the bound elements that declare an
            update action. Submitting them leaves the document as it is.
        '''
        values = FormValues()
        nodes = self.document.registry
        for hash, element in self.root.flatten().items():
            bundle = element.actions
            if bundle is None or bundle.update is None or not nodes.is_registered(hash):
                continue

            if bundle.update.path:
                matched = bundle.update.query(self.document, element)
            else:
                matched = [nodes.get(hash)]

            if matched:
                values.set_value(hash, self.document.get_value(matched[0]))

        return values

    def submit(self, values) -> XMLDocument:
        if not isinstance(values, FormValues):
            values = self.values(values)

        document = Processor(values, self.document, self.registry).process(self.root)
        logger.info('Processed form [%s], %d node(s) registered', self.root.hash, len(self.document.registry))
        return document
