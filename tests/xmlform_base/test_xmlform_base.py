from types import SimpleNamespace

import pytest


def test_setup_module():
    from xmlform import setupModule

    defaults = SimpleNamespace(TEST_CONFIG_KEY='sample-value', TEST_CONFIG_INT=3)
    config, logger = setupModule('test_setupModule', defaults)
    assert config.TEST_CONFIG_KEY == 'sample-value'
    assert config.TEST_CONFIG_INT == 3
    assert config.get('MISSING_KEY') is None
    assert dict(config.items())['TEST_CONFIG_INT'] == 3
    assert config['LOG_LEVEL'] == 'info'

    with pytest.raises(AttributeError):
        config.MISSING_KEY
    assert logger.name == 'test_setupModule'


def test_module_config_defaults():
    from xmlform.api import config as api_config
    from xmlform.form import config as form_config

    assert api_config.DEFINITION_VERSION == 3
    assert form_config.ACCESS_CONTROL == '#access'
    assert form_config.ACTIONS_CONTROL == '#actions'


def test_exception_format():
    from xmlform.error import NotFoundError

    error = NotFoundError("T00.404", "Missing thing")
    assert str(error) == "T00.404 [404] >> Missing thing"
    assert error.content == {"errcode": "T00.404", "message": "Missing thing"}

    error = NotFoundError("T00.404", "Missing thing", {"id": 1})
    assert str(error).endswith(">> {'id': 1}")


def test_class_registry():
    from xmlform.error import BadRequestError, NotFoundError
    from xmlform.helper import ClassRegistry

    class Base(object):
        pass

    Registry = ClassRegistry(Base)

    @Registry.register
    class SampleItem(Base):
        pass

    @Registry.register('other')
    class OtherItem(Base):
        def __init__(self, value):
            self.value = value

    assert Registry.get('sample-item') is SampleItem
    assert Registry.construct('other', 5).value == 5
    assert set(Registry.keys()) == {'sample-item', 'other'}

    with pytest.raises(BadRequestError):
        Registry.register('other')(type('Another', (Base,), {}))

    with pytest.raises(NotFoundError):
        Registry.get('unknown')


def test_natural_key():
    from xmlform.helper import natural_key

    names = ['form 10', 'Form 2', 'form 1']
    assert sorted(names, key=natural_key) == ['form 1', 'Form 2', 'form 10']


def test_data_model():
    from pydantic import ValidationError
    from xmlform.api import FormProperties

    properties = FormProperties.create({'root_name': 'mods'}, defaults={'schema_uri': 'mods.xsd'})
    assert properties.schema_uri == 'mods.xsd'

    renamed = properties.set(root_name='dc')
    assert renamed.root_name == 'dc'
    assert properties.root_name == 'mods'

    with pytest.raises(ValidationError):
        properties.root_name = 'dc'
