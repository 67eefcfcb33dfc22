"""
Application level change log.

The database defines no triggers, so every write made through an ORM
session is recorded here: an ``after_flush`` hook adds one ``audit`` row per
inserted, updated or deleted row with JSON snapshots of its columns.
Binary columns and credentials are left out of the snapshots.
"""

import logging

from sqlalchemy import event, insert, inspect
from sqlalchemy.orm import Session

from ..models import Audit
from ..utils.serialize import HIDDEN_COLUMNS, is_binary, serialize_value

logger = logging.getLogger(__name__)


def snapshot(row):
    """Loaded column values only, so a flush never triggers extra loads."""
    loaded = inspect(row).dict
    return {
        column.key: serialize_value(loaded[column.key])
        for column in row.__table__.columns
        if column.key in loaded
        and column.key not in HIDDEN_COLUMNS
        and not is_binary(column)
    }


def record_id(row):
    # composite keys are logged under their first column
    return inspect(row).mapper.primary_key_from_instance(row)[0]


def previous_snapshot(row):
    """Column values as they were before the pending changes."""
    state = inspect(row)
    data = snapshot(row)
    for key in data:
        history = state.attrs[key].history
        if history.deleted:
            data[key] = serialize_value(history.deleted[0])
    return data


def entry(row, action, old_data=None, new_data=None, changed_by=None):
    return {
        "table_name": row.__tablename__,
        "record_id": record_id(row),
        "action": action,
        "old_data": old_data,
        "new_data": new_data,
        "changed_by": changed_by,
    }


def write_entries(session, entries):
    if entries:
        session.connection().execute(insert(Audit.__table__), entries)


def is_enabled(session):
    return session.info.get("audit_enabled", True) and event.contains(
        Session, "after_flush", _after_flush
    )


def record_delete(session, row):
    """Log a delete that bypasses the unit of work (bulk/Core deletes)."""
    write_entries(
        session,
        [
            entry(
                row,
                "delete",
                old_data=snapshot(row),
                changed_by=session.info.get("changed_by"),
            )
        ],
    )


def _after_flush(session, flush_context):
    if not session.info.get("audit_enabled", True):
        return

    changed_by = session.info.get("changed_by")
    entries = []

    for row in session.new:
        if isinstance(row, Audit):
            continue
        entries.append(entry(row, "insert", new_data=snapshot(row), changed_by=changed_by))

    for row in session.dirty:
        if isinstance(row, Audit) or not session.is_modified(row):
            continue
        entries.append(
            entry(
                row,
                "update",
                old_data=previous_snapshot(row),
                new_data=snapshot(row),
                changed_by=changed_by,
            )
        )

    for row in session.deleted:
        if isinstance(row, Audit):
            continue
        entries.append(entry(row, "delete", old_data=snapshot(row), changed_by=changed_by))

    write_entries(session, entries)


def init_audit(app):
    """Attach the flush hook when AUDIT_ENABLED is set."""
    if not app.config.get("AUDIT_ENABLED", True):
        if event.contains(Session, "after_flush", _after_flush):
            event.remove(Session, "after_flush", _after_flush)
        return
    if not event.contains(Session, "after_flush", _after_flush):
        event.listen(Session, "after_flush", _after_flush)
        logger.info("Audit logging enabled")
