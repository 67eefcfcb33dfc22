import logging
from datetime import datetime

from sqlalchemy import func, select

from ..models import (
    ActiveUsersMonthly,
    MonthlyRevenue,
    NewUsersMonthly,
    Transactions,
    Users,
)

logger = logging.getLogger(__name__)


def month_bounds(year, month):
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


def _upsert(session, model, keys, values):
    row = session.scalars(select(model).filter_by(**keys)).first()
    if row is None:
        row = model(**keys, **values)
        session.add(row)
    else:
        for key, value in values.items():
            setattr(row, key, value)
    return row


def refresh_monthly_stats(session, year, month):
    """
    Recount new users, active users and per-salon revenue for one month.

    Safe to run repeatedly; existing rows for the month are overwritten.
    """
    start, end = month_bounds(year, month)
    period = {"year": year, "month": month}

    new_users = session.scalar(
        select(func.count(Users.uid)).where(
            Users.created_at >= start, Users.created_at < end
        )
    )
    active_users = session.scalar(
        select(func.count(Users.uid)).where(
            Users.last_active >= start, Users.last_active < end
        )
    )
    _upsert(session, NewUsersMonthly, period, {"new_users_count": new_users or 0})
    _upsert(session, ActiveUsersMonthly, period, {"active_count": active_users or 0})

    revenue_rows = session.execute(
        select(Transactions.bid, func.sum(Transactions.amount))
        .where(Transactions.created_at >= start, Transactions.created_at < end)
        .group_by(Transactions.bid)
    ).all()
    revenue = {bid: int(round(total or 0)) for bid, total in revenue_rows}
    # salons with no transactions left in the month lose their stale row
    stale = session.scalars(select(MonthlyRevenue).filter_by(**period)).all()
    for row in stale:
        if row.bid not in revenue:
            session.delete(row)
    for bid, total in revenue.items():
        _upsert(session, MonthlyRevenue, {"bid": bid, **period}, {"revenue": total})

    session.commit()
    logger.info(
        "Stats %04d-%02d: %s new, %s active, revenue for %d salon(s)",
        year,
        month,
        new_users,
        active_users,
        len(revenue),
    )
    return {
        "year": year,
        "month": month,
        "new_users": new_users or 0,
        "active_users": active_users or 0,
        "revenue": revenue,
    }
