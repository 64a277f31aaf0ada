"""
Form Definition Generator

Serializes the schema of a form (its element tree and controls, not the
submitted data) into an XML form definition:

    <definition version="3">
      <properties>
        <root_name>mods</root_name>
        <schema_uri>...</schema_uri>
        <namespaces default="...">
          <namespace prefix="xlink">http://www.w3.org/1999/xlink</namespace>
        </namespaces>
      </properties>
      <form>
        <properties>...</properties>
        <children>
          <element name="title">...</element>
        </children>
      </form>
    </definition>
"""
import re

from collections.abc import Mapping
from typing import Union

from lxml import etree

from xmlform.form import FormElement, FormProperty
from xmlform.form import config as form_config

from . import config
from .datadef import FormProperties


RX_XML_TAG = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')
CONTROL_MARKER = form_config.CONTROL_MARKER


def to_text(value) -> str:
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'

    if value is None:
        return ''

    return str(value)


class DefinitionGenerator(object):
    @classmethod
    def create(cls, properties: Union[FormProperties, Mapping], root: FormElement):
        if not isinstance(properties, FormProperties):
            properties = FormProperties.create(dict(properties))

        definition = etree.Element(
            'definition',
            nsmap={'xsi': config.XSI_NAMESPACE},
            version=str(config.DEFINITION_VERSION)
        )
        cls.add_properties(definition, properties)
        cls.add_element(etree.SubElement(definition, 'form'), root)
        return etree.ElementTree(definition)

    @classmethod
    def add_properties(cls, definition, properties: FormProperties):
        form_properties = etree.SubElement(definition, 'properties')
        if properties.root_name is not None:
            etree.SubElement(form_properties, 'root_name').text = properties.root_name

        if properties.schema_uri is not None:
            etree.SubElement(form_properties, 'schema_uri').text = properties.schema_uri

        namespaces = etree.SubElement(form_properties, 'namespaces')
        if properties.default_uri:
            namespaces.set('default', properties.default_uri)

        for prefix, uri in properties.namespaces.items():
            etree.SubElement(namespaces, 'namespace', prefix=prefix).text = uri

    @classmethod
    def add_element(cls, parent, element: FormElement):
        properties = etree.SubElement(parent, 'properties')
        for key, value in element.controls.items():
            cls.add_element_property(properties, key, value)

        children = etree.SubElement(parent, 'children')
        for key, child in element.children.items():
            declaration = etree.SubElement(children, 'element', name=to_text(key))
            cls.add_element(declaration, child)

    @classmethod
    def add_element_property(cls, properties, key, value):
        prop = cls.create_element_property(properties, key)
        cls.set_element_property(prop, value)

    @classmethod
    def create_element_property(cls, properties, key):
        name = to_text(key).lstrip(CONTROL_MARKER)
        if not cls.is_valid_xml_tag(name):
            return etree.SubElement(properties, 'index', key=name)

        return etree.SubElement(properties, name)

    @classmethod
    def set_element_property(cls, prop, value):
        if isinstance(value, FormProperty):
            value = value.to_form()

        if isinstance(value, Mapping):
            for key, item in value.items():
                cls.add_element_property(prop, key, item)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                cls.add_element_property(prop, index, item)
        else:
            prop.text = to_text(value)

    @staticmethod
    def is_valid_xml_tag(name: str) -> bool:
        return RX_XML_TAG.match(name) is not None
