import pytest

from xmlform.api import (
    ActionBundle, Context, ContextDefinitionError, ContextNotFoundError,
    ContextType, XMLDocument, build_element,
)
from xmlform.form import FormElement


def make_tree():
    root = build_element({
        '#actions': {'read': {'path': '/doc', 'context': 'document'}},
        'wrapper': {
            '#actions': {'update': {}},
            'field': {'#actions': {'read': {'path': 'field', 'context': 'parent'}}},
        },
    })
    return root, root['wrapper'], root['wrapper']['field']


def test_document_context_has_no_node():
    document = XMLDocument.from_string("<doc/>")
    root, wrapper, field = make_tree()
    context = Context(ContextType.DOCUMENT)

    assert context.get_node(document, field) is None
    assert context.exists(document, field)


def test_self_context():
    document = XMLDocument.from_string("<doc/>")
    root, wrapper, field = make_tree()
    context = Context('self')

    with pytest.raises(ContextNotFoundError):
        context.get_node(document, root)

    document.registry.register(root.hash, document.root)
    assert context.get_node(document, root) is document.root


def test_parent_context_skips_ancestors_without_nodes():
    document = XMLDocument.from_string("<doc/>")
    root, wrapper, field = make_tree()
    context = Context(ContextType.PARENT)

    # The wrapper only declares an update action, the root defines the context.
    with pytest.raises(ContextNotFoundError):
        context.get_node(document, field)
    assert not context.exists(document, field)

    document.registry.register(root.hash, document.root)
    assert context.get_node(document, field) is document.root
    assert context.exists(document, field)


def test_parent_context_without_defining_ancestor():
    document = XMLDocument.from_string("<doc/>")
    root = FormElement()
    child = FormElement(controls={'#actions': ActionBundle()})
    root.adopt(child, 'child')

    with pytest.raises(ContextDefinitionError):
        Context('parent').get_node(document, child)

    with pytest.raises(ContextDefinitionError):
        Context('parent').get_node(document, root)


def test_context_errors_carry_details():
    document = XMLDocument.from_string("<doc/>")
    element = FormElement()

    with pytest.raises(ContextNotFoundError) as excinfo:
        Context('self').get_node(document, element)

    assert excinfo.value.status_code == 404
    assert excinfo.value.details == {'context': 'self', 'element': element.hash}
