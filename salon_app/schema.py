"""
Creating the salon_app database.

Every table is derived from the models in ``salon_app.models``. Tables are
always created in foreign-key dependency order, so a table comes after every
table it references, and the four roles are seeded right after creation.

``reset_database`` is destructive: on MySQL it drops the whole database
before recreating it.
"""

import logging

from sqlalchemy import insert, select, text
from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.schema import CreateIndex, CreateTable

from .models import ROLE_NAMES, Base, Roles

logger = logging.getLogger(__name__)

DIALECTS = {
    "mysql": mysql.dialect,
    "sqlite": sqlite.dialect,
}


def table_order():
    """Table names in creation order."""
    return [table.name for table in Base.metadata.sorted_tables]


def create_schema(bind):
    Base.metadata.create_all(bind=bind)
    return table_order()


def seed_roles(bind):
    """Insert customer, business, employee and admin; existing names are kept."""
    existing = set(bind.execute(select(Roles.__table__.c.name)).scalars())
    missing = [{"name": name} for name in ROLE_NAMES if name not in existing]
    if missing:
        bind.execute(insert(Roles.__table__), missing)
    return len(missing)


def reset_database(engine):
    """Drop everything, create every table, seed roles. Returns table names."""
    database = engine.url.database

    with engine.begin() as conn:
        if engine.dialect.name == "mysql" and database:
            logger.warning("Dropping database %s", database)
            conn.execute(text(f"DROP DATABASE IF EXISTS `{database}`"))
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{database}`"))
            conn.execute(text(f"USE `{database}`"))
        else:
            logger.warning("Dropping all tables on %s", engine.dialect.name)
            Base.metadata.drop_all(bind=conn)

        tables = create_schema(conn)
        seeded = seed_roles(conn)

    logger.info("Created %d tables, seeded %d roles", len(tables), seeded)
    return tables


def _statement(sql):
    return str(sql).strip() + ";"


def render_ddl(dialect="mysql", database=None):
    """
    The full creation script as SQL text.

    With ``database`` set (MySQL only) the script starts by dropping and
    recreating that database, the same way ``reset_database`` does.
    """
    if dialect not in DIALECTS:
        raise ValueError(f"Unsupported dialect: {dialect}")
    compiled_dialect = DIALECTS[dialect]()

    statements = []
    if database and dialect == "mysql":
        statements += [
            f"DROP DATABASE IF EXISTS `{database}`;",
            f"CREATE DATABASE IF NOT EXISTS `{database}`;",
            f"USE `{database}`;",
        ]

    for table in Base.metadata.sorted_tables:
        statements.append(_statement(CreateTable(table).compile(dialect=compiled_dialect)))
        for index in sorted(table.indexes, key=lambda i: i.name):
            statements.append(
                _statement(CreateIndex(index).compile(dialect=compiled_dialect))
            )
        if table.name == Roles.__tablename__:
            seed = insert(Roles.__table__).values([{"name": name} for name in ROLE_NAMES])
            statements.append(
                _statement(
                    seed.compile(
                        dialect=compiled_dialect,
                        compile_kwargs={"literal_binds": True},
                    )
                )
            )

    return "\n\n".join(statements) + "\n"
