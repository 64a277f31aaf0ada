from typing import List, Optional

from xmlform.error import NotFoundError
from xmlform.helper import natural_key

from .database import FormDatabase
from .source import DeclarativeFormSource, FormSource


class FormRepository(FormSource):
    ''' Forms from the database first, then the declared ones. '''

    def __init__(self, database: FormDatabase, declared: Optional[DeclarativeFormSource] = None):
        self.database = database
        self.declared = declared or DeclarativeFormSource()

    def exists(self, name: str) -> bool:
        return self.database.exists(name) or self.declared.exists(name)

    def valid(self, name: str) -> bool:
        if self.database.exists(name):
            return self.database.valid(name)

        return self.declared.valid(name)

    def get(self, name: str):
        if self.database.exists(name):
            return self.database.get(name)

        if self.declared.exists(name):
            return self.declared.get(name)

        raise NotFoundError("B02.401", f"Form [{name}] does not exist")

    def names(self) -> List[dict]:
        declared = sorted(self.declared.names(), key=lambda entry: natural_key(entry['name']))
        stored = sorted(self.database.names(), key=lambda entry: natural_key(entry['name']))
        return declared + stored

    def create(self, name: str, definition=None) -> bool:
        if self.exists(name):
            return False

        return self.database.create(name, definition)

    def copy(self, source: str, destination: str) -> bool:
        if not self.exists(source):
            return False

        return self.create(destination, self.get(source))

    def update(self, name: str, definition) -> bool:
        return self.database.update(name, definition)

    def delete(self, name: str) -> bool:
        return self.database.delete(name)
