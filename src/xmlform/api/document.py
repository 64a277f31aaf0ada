"""
XML Document

Wraps an lxml tree together with the node registry of the current session.
Attributes are not nodes in lxml; they are represented by XMLAttribute
references to (owner element, attribute name).
"""
from typing import List, Optional

from lxml import etree

from xmlform.error import BadRequestError, UnprocessableError

from . import config, logger
from .datadef import FormProperties
from .registry import NodeRegistry


XSI_NAMESPACE = config.XSI_NAMESPACE


class XMLAttribute(object):
    __slots__ = ('owner', 'name')

    def __init__(self, owner, name):
        self.owner = owner
        self.name = name

    def __eq__(self, other):
        return isinstance(other, XMLAttribute) and other.owner is self.owner and other.name == self.name

    def __hash__(self):
        return hash((id(self.owner), self.name))

    def __repr__(self):
        return f"<XMLAttribute @{self.name} of {self.owner.tag}>"

    @property
    def value(self):
        return self.owner.get(self.name)

    @value.setter
    def value(self, value):
        self.owner.set(self.name, value)

    @property
    def exists(self) -> bool:
        return self.name in self.owner.attrib


def is_attribute(node) -> bool:
    return isinstance(node, XMLAttribute)


class XMLDocument(object):
    def __init__(self, properties: Optional[FormProperties] = None, xml=None, registry: Optional[NodeRegistry] = None, tree=None):
        self.properties = properties or FormProperties()
        self.registry = registry or NodeRegistry()

        if tree is None:
            tree = self._parse(xml) if xml is not None else self._create()
        self.tree = tree

    @classmethod
    def from_string(cls, xml, properties=None, registry=None):
        tree = cls._parse(xml)
        properties = properties or cls.detect_properties(tree.getroot())
        return cls(properties, registry=registry, tree=tree)

    @classmethod
    def from_file(cls, path, properties=None, registry=None):
        try:
            tree = etree.parse(str(path))
        except etree.XMLSyntaxError as e:
            raise UnprocessableError("X03.421", f"Unable to parse document [{path}]", str(e))

        properties = properties or cls.detect_properties(tree.getroot())
        return cls(properties, registry=registry, tree=tree)

    @staticmethod
    def detect_properties(root) -> FormProperties:
        qname = etree.QName(root)
        return FormProperties(
            root_name=qname.localname,
            default_uri=root.nsmap.get(None),
            namespaces={prefix: uri for prefix, uri in root.nsmap.items() if prefix},
        )

    @staticmethod
    def _parse(xml):
        if isinstance(xml, str):
            xml = xml.encode("utf-8")

        try:
            return etree.fromstring(xml).getroottree()
        except etree.XMLSyntaxError as e:
            raise UnprocessableError("X03.422", "Unable to parse document", str(e))

    def _create(self):
        properties = self.properties
        if not properties.root_name:
            raise BadRequestError("X03.301", "A root name is required to create a new document")

        nsmap = dict(properties.namespaces)
        if properties.default_uri:
            nsmap[None] = properties.default_uri

        if properties.schema_uri:
            nsmap.setdefault('xsi', XSI_NAMESPACE)

        root = etree.Element(self.qualify(properties.root_name), nsmap=nsmap)
        if properties.schema_uri:
            location = f"{properties.default_uri} {properties.schema_uri}" if properties.default_uri else properties.schema_uri
            root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", location)

        return etree.ElementTree(root)

    @property
    def root(self):
        return self.tree.getroot()

    @property
    def namespaces(self):
        return dict(self.properties.namespaces)

    def qualify(self, name: str, prefix: Optional[str] = None, default_namespace: bool = True) -> str:
        ''' Clark notation for `name`, resolving `prefix:name` or the given prefix. '''
        if ':' in name:
            prefix, _, name = name.partition(':')

        if prefix:
            try:
                return f"{{{self.properties.namespaces[prefix]}}}{name}"
            except KeyError:
                raise BadRequestError("X03.302", f"Unknown namespace prefix [{prefix}]") from None

        if default_namespace and self.properties.default_uri:
            return f"{{{self.properties.default_uri}}}{name}"

        return name

    def query(self, path: str, context=None) -> List:
        ''' Evaluate `path` relative to `context` (the whole document when None)
            and return the matched nodes.
        '''
        if context is None:
            target = self.tree
        elif is_attribute(context):
            target = context.owner
        else:
            target = context

        try:
            result = target.xpath(path, namespaces=self.namespaces)
        except etree.XPathError as e:
            raise BadRequestError("X03.303", f"Invalid path [{path}]", str(e))

        return self._normalize(result)

    @staticmethod
    def _normalize(result) -> List:
        if not isinstance(result, list):
            return []

        nodes = []
        for item in result:
            if isinstance(item, etree._Element):
                nodes.append(item)
            elif getattr(item, 'is_attribute', False):
                nodes.append(XMLAttribute(item.getparent(), item.attrname))
            elif getattr(item, 'getparent', None) is not None and item.getparent() is not None:
                # Text results stand for the element holding them.
                nodes.append(item.getparent())
        return nodes

    def is_attached(self, node) -> bool:
        ''' True when `node` (or the owner of an attribute) is reachable from the root. '''
        element = node.owner if is_attribute(node) else node
        root = self.root
        while element is not None:
            if element is root:
                return True
            element = element.getparent()
        return False

    def get_value(self, node):
        if is_attribute(node):
            return node.value
        return node.text

    def set_value(self, node, value):
        if value is not None and not isinstance(value, str):
            value = str(value)

        if is_attribute(node):
            node.value = value or ''
        else:
            node.text = value

    def create_element(self, parent, name: str, prefix: Optional[str] = None, text=None):
        element = etree.SubElement(parent, self.qualify(name, prefix))
        if text is not None:
            element.text = str(text)
        return element

    def create_attribute(self, owner, name: str, prefix: Optional[str] = None, value=None) -> XMLAttribute:
        attribute = XMLAttribute(owner, self.qualify(name, prefix, default_namespace=False))
        attribute.value = '' if value is None else str(value)
        return attribute

    def append_xml(self, parent, snippet: str) -> List:
        ''' Parse `snippet` with the document namespaces in scope and append its
            top level elements to `parent`.
        '''
        declarations = ' '.join(f'xmlns:{prefix}="{uri}"' for prefix, uri in self.properties.namespaces.items())
        if self.properties.default_uri:
            declarations += f' xmlns="{self.properties.default_uri}"'

        try:
            wrapper = etree.fromstring(f"<wrapper {declarations}>{snippet}</wrapper>".encode("utf-8"))
        except etree.XMLSyntaxError as e:
            raise BadRequestError("X03.304", "Invalid XML snippet", str(e))

        created = list(wrapper)
        for element in created:
            parent.append(element)
        return created

    def remove(self, node) -> bool:
        if is_attribute(node):
            if not node.exists:
                return False
            del node.owner.attrib[node.name]
            return True

        parent = node.getparent()
        if parent is None:
            return False

        parent.remove(node)
        logger.debug('Removed node [%s]', node.tag)
        return True

    def to_string(self, pretty_print=False) -> str:
        return etree.tostring(self.tree, encoding="unicode", pretty_print=pretty_print)

    def save(self, path, pretty_print=False):
        self.tree.write(str(path), encoding="utf-8", xml_declaration=True, pretty_print=pretty_print)

    def __str__(self):
        return self.to_string()
