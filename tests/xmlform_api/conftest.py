import pytest

from xmlform.api import XMLDocument


PEOPLE_XML = """<people>
  <person type="author"><name>Alice</name></person>
  <person type="editor"><name>Bob</name></person>
  <person type="reviewer"><name>Carol</name></person>
</people>"""


def people_form():
    return {
        '#type': 'form',
        '#actions': {'read': {'path': '/people', 'context': 'document'}},
        'person': {
            '#type': 'fieldset',
            '#actions': {
                'read': {'path': 'person', 'context': 'parent'},
                'create': {'context': 'parent', 'value': 'person'},
                'delete': {},
            },
            'name': {
                '#type': 'textfield',
                '#actions': {
                    'read': {'path': 'name', 'context': 'parent'},
                    'create': {'context': 'parent', 'value': 'name'},
                    'update': {},
                    'delete': {},
                },
            },
            'type': {
                '#type': 'textfield',
                '#actions': {
                    'read': {'path': '@type', 'context': 'parent'},
                    'create': {'context': 'parent', 'type': 'attribute', 'value': 'type'},
                    'update': {},
                },
            },
        },
    }


@pytest.fixture
def people_document():
    return XMLDocument.from_string(PEOPLE_XML)


@pytest.fixture
def people():
    return people_form()
