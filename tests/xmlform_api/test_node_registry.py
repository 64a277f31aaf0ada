import pytest

from lxml import etree

from xmlform.api import NodeRegistry, XMLAttribute
from xmlform.error import BadRequestError, NotFoundError


def test_register_and_get():
    registry = NodeRegistry()
    node = etree.Element('node')

    registry.register('a', node)
    assert registry.is_registered('a')
    assert 'a' in registry
    assert registry.get('a') is node
    assert len(registry) == 1


def test_register_is_not_overwritten():
    registry = NodeRegistry()
    node = etree.Element('node')
    registry.register('a', node)

    # Same binding again is accepted.
    registry.register('a', node)

    with pytest.raises(BadRequestError):
        registry.register('a', etree.Element('other'))

    assert registry.get('a') is node


def test_attribute_references_compare_by_owner_and_name():
    registry = NodeRegistry()
    owner = etree.Element('node', type='x')
    registry.register('a', XMLAttribute(owner, 'type'))
    registry.register('a', XMLAttribute(owner, 'type'))

    with pytest.raises(BadRequestError):
        registry.register('a', XMLAttribute(owner, 'other'))


def test_unregister():
    registry = NodeRegistry()
    registry.register('a', etree.Element('node'))
    registry.unregister('a')
    registry.unregister('missing')

    assert not registry.is_registered('a')
    with pytest.raises(NotFoundError):
        registry.get('a')


def test_snapshot_is_stable():
    registry = NodeRegistry()
    registry.register('a', etree.Element('a'))
    snapshot = registry.get_registered()

    registry.register('b', etree.Element('b'))
    registry.unregister('a')

    assert set(snapshot) == {'a'}
    assert set(registry.get_registered()) == {'b'}
