from datetime import datetime, time
from decimal import Decimal

import pytest
from sqlalchemy import select

from salon_app.errors import CHECK, FOREIGN_KEY, NOT_NULL, UNIQUE, ConstraintViolation
from salon_app.models import (
    AppointmentNotes,
    Appointments,
    Authenticate,
    Business,
    Cart,
    Customers,
    Employee,
    EmployeeServices,
    HoursOfOperation,
    LoyaltyPrograms,
    MonthlyRevenue,
    PaymentInformation,
    Products,
    Reviews,
    Schedule,
    Services,
    Transactions,
    Users,
    UsersRoles,
)
from salon_app.services.repository import Repository


@pytest.mark.schema
class TestCheckConstraints:
    """Invariants the engine enforces on write."""

    def test_deposit_rate_below_one(self, sample_user, sample_address):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Business).create(
                {
                    "uid": sample_user.uid,
                    "name": "Too Greedy",
                    "aid": sample_address.aid,
                    "deposit_rate": "1.000",
                }
            )

        assert e.value.kind == CHECK

    def test_deposit_rate_accepted(self, sample_user, sample_address):
        business = Repository(Business).create(
            {
                "uid": sample_user.uid,
                "name": "Fair Salon",
                "aid": sample_address.aid,
                "deposit_rate": "0.999",
            }
        )

        assert business.deposit_rate == Decimal("0.999")

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, sample_customer, sample_business, rating):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Reviews).create(
                {"cid": sample_customer.cid, "bid": sample_business.bid, "rating": rating}
            )

        assert e.value.kind == CHECK

    def test_review_must_be_about_something(self, sample_customer):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Reviews).create({"cid": sample_customer.cid, "rating": 4})

        assert e.value.kind == CHECK

    def test_review_of_employee_only(self, sample_customer, sample_employee):
        review = Repository(Reviews).create(
            {"cid": sample_customer.cid, "eid": sample_employee.eid, "rating": 5}
        )

        assert review.bid is None

    def test_hours_need_both_times(self, sample_business):
        with pytest.raises(ConstraintViolation) as e:
            Repository(HoursOfOperation).create(
                {"bid": sample_business.bid, "day": "monday", "open_time": "09:00:00"}
            )

        assert e.value.kind == CHECK

    def test_open_must_precede_close(self, sample_business):
        with pytest.raises(ConstraintViolation):
            Repository(HoursOfOperation).create(
                {
                    "bid": sample_business.bid,
                    "day": "monday",
                    "open_time": "17:00:00",
                    "close_time": "09:00:00",
                }
            )

    def test_closed_day_skips_time_order(self, db_session, sample_business):
        hours = HoursOfOperation(
            bid=sample_business.bid,
            day="sunday",
            open_time=time(0, 0),
            close_time=time(0, 0),
            is_closed=True,
        )
        db_session.add(hours)
        db_session.commit()

        assert hours.id is not None

    def test_open_day(self, db_session, sample_business, opening_hours):
        hours = HoursOfOperation(bid=sample_business.bid, day="tuesday", **opening_hours)
        db_session.add(hours)
        db_session.commit()

        assert hours.is_closed is False

    def test_required_column(self, db):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Users).create({"first_name": "Only"})

        assert e.value.kind == NOT_NULL


@pytest.mark.schema
class TestUniqueConstraints:
    def test_one_cart_row_per_product(
        self, sample_customer, sample_product, sample_business
    ):
        repo = Repository(Cart)
        values = {
            "cid": sample_customer.cid,
            "pid": sample_product.pid,
            "bid": sample_business.bid,
        }
        repo.create(values)

        with pytest.raises(ConstraintViolation) as e:
            repo.create({**values, "amount": 3})

        assert e.value.kind == UNIQUE

    def test_one_hours_row_per_day(self, db_session, sample_business, opening_hours):
        repo = Repository(HoursOfOperation)
        repo.create({"bid": sample_business.bid, "day": "friday", "is_closed": True})

        with pytest.raises(ConstraintViolation) as e:
            repo.create({"bid": sample_business.bid, "day": "friday", "is_closed": True})

        assert e.value.kind == UNIQUE

    def test_one_revenue_row_per_month(self, sample_business):
        repo = Repository(MonthlyRevenue)
        values = {"bid": sample_business.bid, "year": 2026, "month": 3, "revenue": 10}
        repo.create(values)

        with pytest.raises(ConstraintViolation) as e:
            repo.create({**values, "revenue": 20})

        assert e.value.kind == UNIQUE

    def test_business_names_unique(self, sample_business, sample_user, sample_address):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Business).create(
                {"uid": sample_user.uid, "name": "Test Salon", "aid": sample_address.aid}
            )

        assert e.value.kind == UNIQUE

    def test_one_customer_profile_per_user(self, sample_customer):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Customers).create({"uid": sample_customer.uid})

        assert e.value.kind == UNIQUE

    def test_skill_listed_once(self, sample_employee, sample_service):
        repo = Repository(EmployeeServices)
        repo.create({"eid": sample_employee.eid, "sid": sample_service.sid})

        with pytest.raises(ConstraintViolation) as e:
            repo.create({"eid": sample_employee.eid, "sid": sample_service.sid})

        assert e.value.kind == UNIQUE


@pytest.mark.schema
class TestForeignKeys:
    def test_unknown_owner_rejected(self, sample_address):
        with pytest.raises(ConstraintViolation) as e:
            Repository(Business).create(
                {"uid": 999, "name": "Ghost Salon", "aid": sample_address.aid}
            )

        assert e.value.kind == FOREIGN_KEY

    def test_rejected_write_leaves_session_usable(self, db_session, sample_address):
        with pytest.raises(ConstraintViolation):
            Repository(Business).create(
                {"uid": 999, "name": "Ghost Salon", "aid": sample_address.aid}
            )

        assert db_session.scalars(select(Business)).all() == []


@pytest.mark.schema
class TestCascades:
    """Deletes go through the engine, which applies cascade and set-null rules."""

    def test_deleting_user_removes_customer(self, db_session, sample_customer):
        cid = sample_customer.cid

        Repository(Users).delete(sample_customer.uid)

        assert db_session.get(Customers, cid) is None

    def test_deleting_owner_removes_business(self, db_session, sample_business):
        bid = sample_business.bid

        Repository(Users).delete(sample_business.uid)

        assert db_session.get(Business, bid) is None

    def test_deleting_business_cascades_and_detaches(
        self, db_session, sample_employee, sample_service, opening_hours
    ):
        bid = sample_employee.bid
        eid = sample_employee.eid
        sid = sample_service.sid
        db_session.add(HoursOfOperation(bid=bid, day="monday", **opening_hours))
        db_session.add(Schedule(eid=eid, day="monday"))
        db_session.commit()

        Repository(Business).delete(bid)

        assert db_session.get(Services, sid) is None
        assert db_session.scalars(select(HoursOfOperation)).all() == []
        employee = db_session.get(Employee, eid)
        assert employee is not None
        assert employee.bid is None
        assert db_session.scalars(select(Schedule)).all() != []

    def test_deleting_user_removes_dependents(self, db_session, sample_user):
        uid = sample_user.uid
        db_session.add_all(
            [
                Authenticate(
                    uid=uid, email="owner@salon.test", pw_hash="a" * 64, salt="b" * 32
                ),
                UsersRoles(uid=uid, rid=2),
                Employee(uid=uid, bio="Also cuts hair"),
                PaymentInformation(
                    uid=uid,
                    payment_type="visa",
                    cardholder_name="Test Owner",
                    card_number="4111111111111111",
                    cvv="123",
                    exp_month=4,
                    exp_year=2030,
                ),
            ]
        )
        db_session.commit()

        Repository(Users).delete(uid)

        for model in (Authenticate, UsersRoles, Employee, PaymentInformation):
            assert db_session.scalars(select(model)).all() == [], model.__tablename__

    def test_deleting_business_removes_catalogue_and_history(
        self, db_session, sample_business, sample_customer, sample_product
    ):
        bid = sample_business.bid
        db_session.add_all(
            [
                LoyaltyPrograms(bid=bid, appts_thresh=True, threshold=10),
                Reviews(cid=sample_customer.cid, bid=bid, rating=5),
                MonthlyRevenue(bid=bid, year=2026, month=3, revenue=120),
            ]
        )
        db_session.commit()

        Repository(Business).delete(bid)

        for model in (Products, LoyaltyPrograms, Reviews, MonthlyRevenue):
            assert db_session.scalars(select(model)).all() == [], model.__tablename__

    def test_deleting_business_detaches_appointments(
        self, db_session, sample_appointment
    ):
        aid = sample_appointment.aid
        bid = sample_appointment.bid

        Repository(Business).delete(bid)

        appointment = db_session.get(Appointments, aid)
        assert appointment is not None
        assert appointment.bid is None
        assert appointment.sid is None
        assert appointment.eid is not None

    def test_deleting_customer_keeps_appointment(self, db_session, sample_appointment):
        aid = sample_appointment.aid

        Repository(Customers).delete(sample_appointment.cid)

        appointment = db_session.get(Appointments, aid)
        assert appointment is not None
        assert appointment.cid is None

    def test_deleting_appointment_removes_notes(self, db_session, sample_appointment):
        aid = sample_appointment.aid
        db_session.add(
            AppointmentNotes(aid=aid, author_role="customer", note_text="Short please")
        )
        db_session.commit()

        Repository(Appointments).delete(aid)

        assert db_session.scalars(select(AppointmentNotes)).all() == []

    def test_business_with_transactions_cannot_be_deleted(
        self, db_session, sample_business
    ):
        db_session.add(
            Transactions(
                bid=sample_business.bid,
                amount=Decimal("40.00"),
                created_at=datetime(2026, 3, 2, 12, 0),
            )
        )
        db_session.commit()

        with pytest.raises(ConstraintViolation) as e:
            Repository(Business).delete(sample_business.bid)

        assert e.value.kind == FOREIGN_KEY
        assert db_session.get(Business, sample_business.bid) is not None
