import base64
from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import LargeBinary, inspect

from ..errors import InvalidField

# Never leave the database through the API or the audit log
HIDDEN_COLUMNS = {"pw_hash", "salt", "card_number", "cvv"}


def column_python_type(column):
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def is_binary(column):
    return isinstance(column.type, LargeBinary)


def serialize_value(value):
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def to_dict(row, include_binary=True, hidden=HIDDEN_COLUMNS):
    """Plain dict of a mapped row's column values, JSON ready."""
    data = {}
    for column in row.__table__.columns:
        if column.key in hidden:
            continue
        if is_binary(column) and not include_binary:
            continue
        data[column.key] = serialize_value(getattr(row, column.key))
    return data


def coerce_value(column, value):
    """Convert a JSON value to what the column expects."""
    if value is None:
        return None

    py_type = column_python_type(column)
    try:
        if is_binary(column):
            return base64.b64decode(value)
        if py_type is datetime:
            return datetime.fromisoformat(value)
        if py_type is date:
            return date.fromisoformat(value)
        if py_type is time:
            return time.fromisoformat(value)
        if py_type is Decimal:
            return Decimal(str(value))
        if py_type is bool:
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        if py_type is int:
            return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidField(f"Bad value for {column.key}: {value!r} ({e})") from e
    return value


def coerce_values(model, values, readonly=()):
    """Validate field names against the model's columns and coerce each value."""
    columns = {c.key: c for c in inspect(model).columns}
    unknown = [k for k in values if k not in columns or k in readonly]
    if unknown:
        raise InvalidField(f"Unknown or read-only fields: {', '.join(sorted(unknown))}")
    return {key: coerce_value(columns[key], value) for key, value in values.items()}
