import logging

from sqlalchemy import and_, delete, inspect, select
from sqlalchemy.exc import DBAPIError

from ..errors import InvalidField, RecordNotFound, classify
from ..extensions import db
from ..utils.serialize import HIDDEN_COLUMNS, coerce_values
from . import audit

logger = logging.getLogger(__name__)


class Repository:
    """
    Create/read/update/delete over one mapped table.

    No invariant is checked here: the database engine is the only judge, and
    whatever it rejects comes back as a ConstraintViolation after the session
    has been rolled back.
    """

    def __init__(self, model, session=None, readonly=()):
        self.model = model
        self.session = session if session is not None else db.session
        self.readonly = set(readonly)
        self.mapper = inspect(model)
        self.pk_columns = list(self.mapper.primary_key)

    @property
    def table_name(self):
        return self.model.__tablename__

    def normalize_pk(self, pk):
        """Scalar or sequence -> tuple in primary key column order."""
        if not isinstance(pk, (tuple, list)):
            pk = (pk,)
        if len(pk) != len(self.pk_columns):
            raise InvalidField(
                f"{self.table_name} key has {len(self.pk_columns)} part(s), got {len(pk)}"
            )
        try:
            return tuple(
                column.type.python_type(value) if isinstance(value, str) else value
                for column, value in zip(self.pk_columns, pk)
            )
        except (TypeError, ValueError) as e:
            raise InvalidField(f"Bad key for {self.table_name}: {pk!r}") from e

    def _pk_clause(self, pk):
        return and_(*(column == value for column, value in zip(self.pk_columns, pk)))

    def get(self, pk):
        pk = self.normalize_pk(pk)
        row = self.session.get(self.model, pk if len(pk) > 1 else pk[0])
        if row is None:
            raise RecordNotFound(self.table_name, pk if len(pk) > 1 else pk[0])
        return row

    def list(self, filters=None, limit=None, offset=0):
        # hidden columns can't be matched by equality filters either
        criteria = coerce_values(self.model, filters or {}, HIDDEN_COLUMNS)
        stmt = select(self.model).filter_by(**criteria).order_by(*self.pk_columns)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    def commit(self, action, statement=None):
        try:
            if statement is not None:
                self.session.execute(statement)
            self.session.commit()
        except DBAPIError as e:
            self.session.rollback()
            violation = classify(e)
            if violation is None:
                raise
            logger.info(
                "%s on %s rejected (%s): %s",
                action,
                self.table_name,
                violation.kind,
                violation.message,
            )
            raise violation from e

    def create(self, values):
        row = self.model(**coerce_values(self.model, values, self.readonly))
        self.session.add(row)
        self.commit("insert")
        return row

    def update(self, pk, values):
        row = self.get(pk)
        for key, value in coerce_values(self.model, values, self.readonly).items():
            setattr(row, key, value)
        self.commit("update")
        return row

    def delete(self, pk):
        """
        Delete through the engine.

        The statement goes straight to the database so its cascade and
        set-null rules decide what happens to dependent rows. Everything in
        the session is expired afterwards since any of it may have changed.
        """
        row = self.get(pk)
        pk = self.normalize_pk(pk)
        if audit.is_enabled(self.session):
            audit.record_delete(self.session, row)
        self.commit(
            "delete", delete(self.model.__table__).where(self._pk_clause(pk))
        )
        self.session.expire_all()
