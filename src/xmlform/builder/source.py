"""
Form Sources

A form source looks up XML form definitions by name. Sources are built and
handed to their callers explicitly; nothing is looked up process-wide.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree

from xmlform.api import DefinitionGenerator, FormProperties
from xmlform.error import BadRequestError, NotFoundError, UnprocessableError
from xmlform.form import FormElement

from . import logger


def parse_definition(source: Union[str, bytes, Path, etree._ElementTree]):
    ''' Load a definition from a path, an XML string or an existing tree. '''
    if isinstance(source, etree._ElementTree):
        return source

    try:
        if isinstance(source, Path):
            return etree.parse(str(source))

        if isinstance(source, str):
            source = source.encode("utf-8")

        return etree.fromstring(source).getroottree()
    except (etree.XMLSyntaxError, OSError) as e:
        raise UnprocessableError("B00.421", "Unable to parse form definition", str(e))


def is_definition(tree) -> bool:
    root = tree.getroot() if tree is not None else None
    return root is not None and root.tag == 'definition' and root.get('version') is not None


def empty_definition():
    return DefinitionGenerator.create(FormProperties(), FormElement())


def serialize_definition(tree) -> str:
    return etree.tostring(tree, encoding="unicode")


class FormSource(ABC):
    @abstractmethod
    def names(self) -> List[dict]:
        ''' [{'name': ..., 'indb': bool}, ...] '''

    @abstractmethod
    def exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def get(self, name: str):
        ''' The definition tree of `name`; raises NotFoundError when absent. '''

    def valid(self, name: str) -> bool:
        if not self.exists(name):
            return False

        try:
            return is_definition(self.get(name))
        except (NotFoundError, UnprocessableError) as e:
            logger.warning('Invalid form definition [%s]: %s', name, e)
            return False

    def valid_names(self) -> List[dict]:
        return [entry for entry in self.names() if self.valid(entry['name'])]


class DeclarativeFormSource(FormSource):
    ''' Forms declared by name, with a definition file or a definition tree. '''

    def __init__(self, forms: Optional[Dict[str, object]] = None):
        self._forms: Dict[str, object] = {}
        for name, definition in (forms or {}).items():
            self.register(name, definition)

    def register(self, name: str, definition):
        if name in self._forms:
            raise BadRequestError("B00.301", f"Form [{name}] is already declared")

        if isinstance(definition, str) and not definition.lstrip().startswith('<'):
            definition = Path(definition)

        self._forms[name] = definition
        logger.debug('Declared form [%s]', name)

    def names(self) -> List[dict]:
        return [{'name': name, 'indb': False} for name in self._forms]

    def exists(self, name: str) -> bool:
        return name in self._forms

    def get(self, name: str):
        try:
            definition = self._forms[name]
        except KeyError:
            raise NotFoundError("B00.401", f"Form [{name}] is not declared") from None

        if isinstance(definition, Path) and not definition.exists():
            raise NotFoundError("B00.402", f"Definition file of form [{name}] does not exist", str(definition))

        return parse_definition(definition)
