import pytest

from xmlform.error import BadRequestError, NotFoundError
from xmlform.form import FormElement, FormElementRegistry, FormValues


def make_tree():
    root = FormElement(controls={'#type': 'form'})
    person = FormElement(controls={'#type': 'fieldset'})
    name = FormElement(controls={'#type': 'textfield'})
    role = FormElement(controls={'#type': 'textfield'})
    person.adopt(name, 'name')
    person.adopt(role, 'role')
    root.adopt(person, 'person')
    return root, person, name, role


def test_adopt_and_navigation():
    root, person, name, role = make_tree()

    assert person.parent is root
    assert person.key == 'person'
    assert root['person'] is person
    assert 'person' in root
    assert list(name.ancestors()) == [person, root]
    assert name.root is root

    with pytest.raises(BadRequestError):
        root.adopt(name)

    with pytest.raises(BadRequestError):
        root.adopt(FormElement(), 'person')


def test_adopt_without_key_uses_next_index():
    root = FormElement()
    assert root.adopt(FormElement()) == 0
    assert root.adopt(FormElement()) == 1
    root.adopt(FormElement(), 'named')
    assert root.adopt(FormElement()) == 2


def test_flatten_is_depth_first():
    root, person, name, role = make_tree()
    second = FormElement()
    root.adopt(second, 'second')

    assert list(root.flatten()) == [root.hash, person.hash, name.hash, role.hash, second.hash]
    assert list(person.descendants()) == [name, role]


def test_remove_and_detach():
    root, person, name, role = make_tree()

    assert person.remove('role') is role
    assert role.parent is None
    assert 'role' not in person

    person.detach()
    assert person.parent is None
    assert len(root) == 0

    with pytest.raises(NotFoundError):
        root['person']


def test_access_control():
    element = FormElement(controls={'#access': False})
    assert element.access is False
    assert FormElement().access is True


def test_clone_assigns_new_hashes():
    root, person, name, role = make_tree()
    clone = person.clone()

    assert clone.parent is None
    assert clone.hash != person.hash
    assert list(clone.children) == ['name', 'role']
    assert clone['name'].hash != name.hash
    assert clone['name'].controls == name.controls


def test_registry_duplicates_original_template():
    root, person, name, role = make_tree()
    registry = FormElementRegistry()
    registry.register(root)

    # Changes made after registration do not leak into duplicates.
    person.controls['#title'] = 'Edited'
    person['name'].adopt(FormElement(), 'extra')

    duplicate = registry.duplicate_original(person.hash)
    assert '#title' not in duplicate.controls
    assert 'extra' not in duplicate['name']
    assert duplicate.hash in registry
    assert duplicate['name'].hash in registry

    # Duplicates of duplicates come from the same template.
    again = registry.duplicate_original(duplicate.hash)
    assert list(again.children) == ['name', 'role']
    assert len({person.hash, duplicate.hash, again.hash}) == 3


def test_registry_keeps_removed_elements():
    root, person, name, role = make_tree()
    registry = FormElementRegistry()
    registry.register(root)

    person.detach()
    assert registry.get(person.hash) is person
    assert registry.find('unknown') is None

    with pytest.raises(NotFoundError):
        registry.get('unknown')


def test_values_from_submission():
    root, person, name, role = make_tree()
    values = FormValues.from_submission(root, {'person': {'name': 'Alice', 'role': 'author'}})

    assert values.get_value(name.hash) == 'Alice'
    assert values.get_value(role.hash) == 'author'
    assert values.get_value(person.hash) is None
    assert person.hash not in values
