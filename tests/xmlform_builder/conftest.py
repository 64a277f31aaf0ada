import pytest

from xmlform.api import DefinitionGenerator, FormProperties, build_element
from xmlform.builder import FormDatabase


def make_definition(root_name='mods'):
    root = build_element({
        '#type': 'form',
        'title': {'#type': 'textfield', '#title': 'Title'},
    })
    return DefinitionGenerator.create(FormProperties(root_name=root_name), root)


@pytest.fixture
def definition():
    return make_definition()


@pytest.fixture
def database():
    return FormDatabase('sqlite://').setup()


@pytest.fixture
def definition_factory():
    return make_definition
