from typing import List, Optional

import sqlalchemy as sa

from xmlform.error import BadRequestError, NotFoundError

from . import config, logger
from .source import FormSource, empty_definition, parse_definition, serialize_definition


def form_table(metadata: sa.MetaData, name: Optional[str] = None) -> sa.Table:
    return sa.Table(
        name or config.XMLFORM_TABLE,
        metadata,
        sa.Column('name', sa.String(128), primary_key=True),
        sa.Column('form', sa.Text, nullable=False),
    )


class FormDatabase(FormSource):
    ''' Form definitions stored in a SQL table of (name, form). '''

    def __init__(self, engine=None, table: Optional[str] = None):
        if engine is None or isinstance(engine, str):
            engine = sa.create_engine(engine or config.DB_DSN)

        self.engine = engine
        self.metadata = sa.MetaData()
        self.table = form_table(self.metadata, table)

    def setup(self):
        self.metadata.create_all(self.engine)
        return self

    def exists(self, name: str) -> bool:
        stmt = sa.select(sa.func.count()).select_from(self.table).where(self.table.c.name == name)
        with self.engine.connect() as conn:
            return conn.execute(stmt).scalar() == 1

    def get(self, name: str):
        stmt = sa.select(self.table.c.form).where(self.table.c.name == name)
        with self.engine.connect() as conn:
            xml = conn.execute(stmt).scalar()

        if xml is None or xml.strip() == '':
            raise NotFoundError("B01.401", f"Form [{name}] is not in the database")

        return parse_definition(xml)

    def names(self) -> List[dict]:
        stmt = sa.select(self.table.c.name).order_by(self.table.c.name)
        with self.engine.connect() as conn:
            return [{'name': name, 'indb': True} for name in conn.execute(stmt).scalars()]

    def create(self, name: str, definition=None) -> bool:
        if self.exists(name):
            return False

        definition = parse_definition(definition) if definition is not None else empty_definition()
        with self.engine.begin() as conn:
            conn.execute(self.table.insert().values(name=name, form=serialize_definition(definition)))

        logger.info('Created form [%s]', name)
        return True

    def copy(self, source: str, destination: str) -> bool:
        if not self.exists(source):
            return False

        return self.create(destination, self.get(source))

    def update(self, name: str, definition) -> bool:
        if not self.exists(name):
            return False

        definition = parse_definition(definition)
        stmt = self.table.update().where(self.table.c.name == name).values(form=serialize_definition(definition))
        with self.engine.begin() as conn:
            return conn.execute(stmt).rowcount > 0

    def delete(self, name: str) -> bool:
        if not self.exists(name):
            return False

        with self.engine.begin() as conn:
            deleted = conn.execute(self.table.delete().where(self.table.c.name == name)).rowcount > 0

        if not deleted:
            raise BadRequestError("B01.301", f"Unable to delete form [{name}]")

        logger.info('Deleted form [%s]', name)
        return deleted
