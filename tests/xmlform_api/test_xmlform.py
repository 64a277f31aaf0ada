import pytest

from xmlform.api import ActionBundle, FormProperties, XMLDocument, XMLForm, build_element
from xmlform.error import BadRequestError, NotFoundError


def test_build_element(people):
    root = build_element(people)

    person = root['person']
    assert list(root.children) == ['person']
    assert list(person.children) == ['name', 'type']
    assert person.controls['#type'] == 'fieldset'
    assert isinstance(person.actions, ActionBundle)
    assert person.actions.update is None
    assert person['name'].actions.update is not None
    assert person['name'].parent is person


def test_build_element_rejects_scalar_children():
    with pytest.raises(BadRequestError):
        build_element({'#type': 'form', 'title': 'Title'})


def test_initialize_runs_once(people, people_document):
    form = XMLForm.from_form(people, people_document)

    assert len(form.initialize()) == 2
    assert form.initialize() == []
    assert list(form.root.children) == ['person', 0, 1]


def test_get_and_remove(people, people_document):
    form = XMLForm.from_form(people, people_document)
    form.initialize()

    bob = form.get(form.root[0].hash)
    assert people_document.registry.get(bob['name'].hash).text == 'Bob'

    assert form.remove(bob.hash) is bob
    assert bob.parent is None
    assert 0 not in form.root
    # Removed elements are still known to the session.
    assert form.get(bob.hash) is bob

    with pytest.raises(NotFoundError):
        form.get('missing')


def test_duplicate_root_is_refused(people, people_document):
    form = XMLForm.from_form(people, people_document)
    with pytest.raises(BadRequestError):
        form.duplicate(form.root.hash)


def test_duplicate_uses_the_original_template(people, people_document):
    form = XMLForm.from_form(people, people_document)
    form.initialize()

    carol = form.root[1]
    carol.controls['#title'] = 'Changed'
    copy = form.duplicate(carol.hash)

    assert copy.key == 2
    assert '#title' not in copy.controls
    assert list(copy.children) == ['name', 'type']
    assert copy.hash != carol.hash
    assert not people_document.registry.is_registered(copy.hash)


def test_submit_nested_values(people, people_document):
    form = XMLForm.from_form(people, people_document)
    form.initialize()

    document = form.submit({
        'person': {'name': 'Ann', 'type': 'author'},
        0: {'name': 'Ben', 'type': 'editor'},
        1: {'name': 'Cat', 'type': 'reviewer'},
    })

    assert [name.text for name in document.query('/people/person/name')] == ['Ann', 'Ben', 'Cat']


def test_new_document():
    properties = FormProperties(root_name='notes')
    form = XMLForm.from_form({
        '#actions': {'read': {'path': '/notes', 'context': 'document'}},
        'note': {
            '#actions': {
                'read': {'path': 'note', 'context': 'parent'},
                'create': {'context': 'parent', 'value': 'note'},
                'update': {},
            },
        },
    }, XMLDocument(properties))

    assert form.initialize() == []
    document = form.submit({'note': 'hello'})

    assert document.to_string() == '<notes><note>hello</note></notes>'
    assert document.registry.get(form.root['note'].hash).text == 'hello'


def test_current_values(people, people_document):
    form = XMLForm.from_form(people, people_document)
    form.initialize()
    before = people_document.to_string()

    values = form.current_values()
    person = form.root['person']
    assert values.get_value(person['name'].hash) == 'Alice'
    assert values.get_value(person['type'].hash) == 'author'
    assert person.hash not in values

    assert form.submit(values).to_string() == before

    # Fields left out of a submission are cleared.
    document = form.submit({})
    assert [name.text for name in document.query('/people/person/name')] == [None, None, None]


def test_current_values_follow_update_paths():
    form = XMLForm.from_form({
        '#actions': {'read': {'path': '/doc', 'context': 'document'}},
        'item': {
            '#actions': {
                'read': {'path': 'item', 'context': 'parent'},
                'update': {'path': 'label', 'context': 'self'},
            },
        },
    }, XMLDocument.from_string('<doc><item><label>one</label></item></doc>'))
    form.initialize()

    assert form.current_values().get_value(form.root['item'].hash) == 'one'
