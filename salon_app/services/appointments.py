"""
Appointment status transitions.

    upcoming / rescheduled -> pending_payment, completed, cancelled,
                              no_show, rescheduled
    pending_payment        -> completed, cancelled
    completed, cancelled, no_show are final.

An appointment whose expected end has passed and that is still upcoming
(or rescheduled) waits for payment; see ``advance_past_due``.
"""

import logging
from datetime import datetime

from sqlalchemy import select

from ..errors import InvalidField, InvalidStatusTransition
from ..models import APPOINTMENT_STATUSES, Appointments

logger = logging.getLogger(__name__)

UPCOMING = "upcoming"
PENDING_PAYMENT = "pending_payment"
COMPLETED = "completed"
RESCHEDULED = "rescheduled"
CANCELLED = "cancelled"
NO_SHOW = "no_show"

_OPEN = frozenset({PENDING_PAYMENT, COMPLETED, CANCELLED, NO_SHOW, RESCHEDULED})

TRANSITIONS = {
    UPCOMING: _OPEN,
    RESCHEDULED: _OPEN,
    PENDING_PAYMENT: frozenset({COMPLETED, CANCELLED}),
    COMPLETED: frozenset(),
    CANCELLED: frozenset(),
    NO_SHOW: frozenset(),
}

FINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)


def can_transition(current, target):
    return target in TRANSITIONS.get(current or UPCOMING, frozenset())


def transition(appointment: Appointments, target: str, now=None):
    """Move an appointment to ``target`` or raise InvalidStatusTransition."""
    if target not in APPOINTMENT_STATUSES:
        raise InvalidField(f"Unknown appointment status: {target!r}")

    current = appointment.status or UPCOMING
    if not can_transition(current, target):
        raise InvalidStatusTransition(current, target)

    appointment.status = target
    if target == COMPLETED and appointment.end_time is None:
        appointment.end_time = now or datetime.now()
    return appointment


def reschedule(appointment: Appointments, start_time, expected_end_time):
    if (start_time.tzinfo is None) != (expected_end_time.tzinfo is None):
        raise InvalidField("start_time and expected_end_time mix offset and naive times")
    if start_time >= expected_end_time:
        raise InvalidField("start_time must be before expected_end_time")
    transition(appointment, RESCHEDULED)
    appointment.start_time = start_time
    appointment.expected_end_time = expected_end_time
    return appointment


def advance_past_due(session, now=None):
    """Upcoming appointments that should have ended move to pending_payment."""
    now = now or datetime.now()
    past_due = session.scalars(
        select(Appointments).where(
            Appointments.status.in_([UPCOMING, RESCHEDULED]),
            Appointments.expected_end_time < now,
        )
    ).all()

    for appointment in past_due:
        transition(appointment, PENDING_PAYMENT)

    if past_due:
        session.commit()
        logger.info("Moved %d appointment(s) to pending_payment", len(past_due))
    return len(past_due)
