"""Domain errors and translation of engine constraint violations."""

import re

from sqlalchemy.exc import DBAPIError, IntegrityError

FOREIGN_KEY = "foreign_key"
CHECK = "check"
UNIQUE = "unique"
NOT_NULL = "not_null"

# MySQL server error numbers
MYSQL_CODES = {
    1062: UNIQUE,
    1216: FOREIGN_KEY,
    1217: FOREIGN_KEY,
    1451: FOREIGN_KEY,
    1452: FOREIGN_KEY,
    3819: CHECK,
    1048: NOT_NULL,
    1364: NOT_NULL,
}

SQLITE_PREFIXES = (
    ("UNIQUE constraint failed", UNIQUE),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY),
    ("CHECK constraint failed", CHECK),
    ("NOT NULL constraint failed", NOT_NULL),
)

_MYSQL_NAME = re.compile(r"(?:CONSTRAINT|constraint|key) [`']([\w.]+)[`']")
_SQLITE_NAME = re.compile(r"constraint failed: ([\w., ]+)")


class SalonDataError(Exception):
    pass


class RecordNotFound(SalonDataError, LookupError):
    def __init__(self, table, pk):
        self.table = table
        self.pk = pk
        super().__init__(f"No {table} row with key {pk!r}")


class InvalidField(SalonDataError, ValueError):
    pass


class InvalidStatusTransition(SalonDataError, ValueError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move appointment from {current!r} to {target!r}")


class ConstraintViolation(SalonDataError):
    """The database engine rejected a write."""

    def __init__(self, kind, message, constraint=None):
        self.kind = kind
        self.message = message
        self.constraint = constraint
        super().__init__(message)

    def to_dict(self):
        return {
            "kind": self.kind,
            "constraint": self.constraint,
            "details": self.message,
        }


def classify(exc: DBAPIError):
    """
    Map a DBAPI error raised on write to a ConstraintViolation.

    Returns None when the error is not a constraint violation. MySQL reports
    check failures (3819) as an OperationalError, so the caller passes any
    DBAPIError here, not only IntegrityError.
    """
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in MYSQL_CODES:
        detail = str(args[1]) if len(args) > 1 else message
        match = _MYSQL_NAME.search(detail)
        return ConstraintViolation(
            MYSQL_CODES[args[0]], detail, match.group(1) if match else None
        )

    for prefix, kind in SQLITE_PREFIXES:
        if message.startswith(prefix):
            match = _SQLITE_NAME.search(message)
            return ConstraintViolation(
                kind, message, match.group(1).strip() if match else None
            )

    if isinstance(exc, IntegrityError):
        # some other driver; still an integrity failure of unknown flavour
        return ConstraintViolation(CHECK, message)
    return None
