import pytest
from sqlalchemy import delete, select

from salon_app.models import ROLE_NAMES, Base, Roles
from salon_app.schema import render_ddl, reset_database, seed_roles, table_order


@pytest.mark.schema
class TestSchema:
    """Table creation order, role seeding and the SQL script."""

    def test_every_table_is_created(self):
        tables = table_order()

        assert len(tables) == 39
        assert set(tables) == set(Base.metadata.tables)
        assert "audit" in tables
        assert "service_time" in tables

    def test_tables_follow_their_references(self):
        tables = table_order()

        for table in Base.metadata.sorted_tables:
            for fk in table.foreign_keys:
                parent = fk.column.table.name
                assert tables.index(parent) < tables.index(table.name), (
                    f"{table.name} created before {parent}"
                )

    def test_business_comes_before_hours(self):
        tables = table_order()

        assert tables.index("users") < tables.index("business")
        assert tables.index("business") < tables.index("hours_of_operation")
        assert tables.index("appointments") < tables.index("transactions")

    def test_roles_are_seeded_in_order(self, db_session):
        roles = db_session.scalars(select(Roles).order_by(Roles.rid)).all()

        assert [role.name for role in roles] == list(ROLE_NAMES)
        assert [role.rid for role in roles] == [1, 2, 3, 4]

    def test_seed_roles_is_idempotent(self, db):
        with db.engine.begin() as conn:
            assert seed_roles(conn) == 0

        assert db.session.scalar(select(Roles).where(Roles.name == "admin")) is not None

    def test_seed_roles_restores_missing(self, db):
        with db.engine.begin() as conn:
            conn.execute(delete(Roles.__table__).where(Roles.__table__.c.name == "admin"))
            assert seed_roles(conn) == 1

    def test_reset_database_recreates_everything(self, db, sample_user):
        db.session.remove()

        tables = reset_database(db.engine)

        assert tables == table_order()
        assert db.session.scalar(select(Roles).where(Roles.name == "customer"))
        assert db.session.execute(select(Base.metadata.tables["users"])).all() == []


@pytest.mark.schema
class TestRenderDDL:
    def test_mysql_script(self):
        script = render_ddl("mysql")

        assert script.count("CREATE TABLE") == 39
        assert "CONSTRAINT ck_deposit_rate CHECK (deposit_rate < 1.000)" in script
        assert "CONSTRAINT ck_review_rating CHECK (rating between 1 and 5)" in script
        assert "ON DELETE CASCADE" in script
        assert "ON DELETE SET NULL" in script
        assert "LONGBLOB" in script
        assert "CREATE UNIQUE INDEX uq_cart_customer_product" in script

    def test_roles_seeded_right_after_roles_table(self):
        statements = render_ddl("mysql").split("\n\n")
        create_roles = next(
            i for i, s in enumerate(statements) if s.startswith("CREATE TABLE roles")
        )
        seed = next(i for i, s in enumerate(statements) if s.startswith("INSERT INTO roles"))

        assert seed > create_roles
        assert all(not s.startswith("CREATE TABLE") for s in statements[create_roles + 1 : seed])
        for name in ROLE_NAMES:
            assert f"'{name}'" in statements[seed]

    def test_statements_in_table_order(self):
        script = render_ddl("sqlite")
        positions = [script.index(f"CREATE TABLE {name} ") for name in table_order()]

        assert positions == sorted(positions)

    def test_database_preamble(self):
        script = render_ddl("mysql", database="salon_app")

        assert script.startswith("DROP DATABASE IF EXISTS `salon_app`;")
        assert "USE `salon_app`;" in script

    def test_every_statement_terminated(self):
        for statement in render_ddl("sqlite").strip().split("\n\n"):
            assert statement.endswith(";")

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            render_ddl("oracle")
