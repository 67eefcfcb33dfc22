from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from salon_app.errors import (
    CHECK,
    FOREIGN_KEY,
    UNIQUE,
    InvalidField,
    RecordNotFound,
    classify,
)
from salon_app.models import (
    Appointments,
    Customers,
    PaymentInformation,
    Products,
    Users,
    UsersRoles,
)
from salon_app.services.repository import Repository
from salon_app.utils.serialize import coerce_values, to_dict


@pytest.mark.repository
class TestRepository:
    """Generic create/read/update/delete."""

    def test_create_and_get(self, db):
        repo = Repository(Users)
        user = repo.create({"first_name": "Ada", "last_name": "Lovelace"})

        fetched = repo.get(user.uid)

        assert fetched.first_name == "Ada"
        assert fetched.created_at is not None

    def test_get_accepts_string_keys(self, sample_user):
        assert Repository(Users).get(str(sample_user.uid)).uid == sample_user.uid

    def test_get_missing(self, db):
        with pytest.raises(RecordNotFound) as e:
            Repository(Users).get(404)

        assert e.value.table == "users"

    def test_bad_key(self, db):
        with pytest.raises(InvalidField):
            Repository(Users).get("abc")

    def test_composite_key(self, sample_user):
        repo = Repository(UsersRoles)
        repo.create({"uid": sample_user.uid, "rid": 2})

        row = repo.get((str(sample_user.uid), "2"))

        assert row.role.name == "business"

    def test_composite_key_wrong_arity(self, sample_user):
        with pytest.raises(InvalidField):
            Repository(UsersRoles).get(sample_user.uid)

    def test_update(self, sample_user):
        repo = Repository(Users)

        repo.update(sample_user.uid, {"phone": "5559876543"})

        assert repo.get(sample_user.uid).phone == "5559876543"

    def test_update_missing(self, db):
        with pytest.raises(RecordNotFound):
            Repository(Users).update(1, {"phone": "1"})

    def test_delete(self, sample_user):
        repo = Repository(Users)
        uid = sample_user.uid

        repo.delete(uid)

        with pytest.raises(RecordNotFound):
            repo.get(uid)

    def test_delete_missing(self, db):
        with pytest.raises(RecordNotFound):
            Repository(Users).delete(12)

    def test_list_filters_and_pages(self, db):
        repo = Repository(Users)
        for name in ("Ann", "Bob", "Cid", "Dee"):
            repo.create({"first_name": name, "last_name": "Smith"})
        repo.create({"first_name": "Eve", "last_name": "Jones"})

        smiths = repo.list({"last_name": "Smith"})
        page = repo.list({"last_name": "Smith"}, limit=2, offset=1)

        assert [u.first_name for u in smiths] == ["Ann", "Bob", "Cid", "Dee"]
        assert [u.first_name for u in page] == ["Bob", "Cid"]

    def test_list_coerces_filter_values(self, sample_customer):
        rows = Repository(Customers).list({"uid": str(sample_customer.uid)})

        assert [c.cid for c in rows] == [sample_customer.cid]

    def test_list_rejects_hidden_filters(self, db):
        with pytest.raises(InvalidField):
            Repository(PaymentInformation).list({"cvv": "123"})

    def test_unknown_field(self, db):
        with pytest.raises(InvalidField):
            Repository(Users).create({"first_name": "A", "last_name": "B", "age": 3})

    def test_readonly_field(self, sample_appointment):
        repo = Repository(Appointments, readonly=("status",))

        with pytest.raises(InvalidField):
            repo.update(sample_appointment.aid, {"status": "completed"})


@pytest.mark.repository
class TestSerialize:
    def test_to_dict_types(self, sample_product):
        sample_product.image = b"\x89PNG"
        data = to_dict(sample_product)

        assert data["price"] == 12.5
        assert data["image"] == "iVBORw=="
        assert isinstance(data["created_at"], str)

    def test_to_dict_without_binary(self, sample_product):
        assert "image" not in to_dict(sample_product, include_binary=False)

    def test_coerce_values(self):
        values = coerce_values(
            Customers,
            {"birthdate": "1990-04-01", "income": 52000.5, "uid": "7"},
        )

        assert values == {
            "birthdate": date(1990, 4, 1),
            "income": Decimal("52000.5"),
            "uid": 7,
        }

    def test_coerce_binary_and_datetime(self):
        values = coerce_values(
            Products,
            {"image": "iVBORw==", "created_at": "2026-01-02T03:04:05"},
        )

        assert values["image"] == b"\x89PNG"
        assert values["created_at"] == datetime(2026, 1, 2, 3, 4, 5)

    def test_coerce_bad_value(self):
        with pytest.raises(InvalidField):
            coerce_values(Customers, {"birthdate": "yesterday"})


class _MySQLError(Exception):
    pass


@pytest.mark.repository
class TestClassify:
    """MySQL error numbers and SQLite messages map to the same kinds."""

    def _wrap(self, cls, *args):
        return cls("INSERT ...", {}, _MySQLError(*args))

    def test_mysql_duplicate(self):
        violation = classify(
            self._wrap(
                IntegrityError,
                1062,
                "Duplicate entry '3-4' for key 'cart.uq_cart_customer_product'",
            )
        )

        assert violation.kind == UNIQUE
        assert violation.constraint == "cart.uq_cart_customer_product"

    def test_mysql_check_is_operational(self):
        violation = classify(
            self._wrap(
                OperationalError, 3819, "Check constraint 'ck_deposit_rate' is violated."
            )
        )

        assert violation.kind == CHECK
        assert violation.constraint == "ck_deposit_rate"

    def test_mysql_foreign_key(self):
        violation = classify(
            self._wrap(
                IntegrityError,
                1451,
                "Cannot delete or update a parent row: a foreign key constraint "
                "fails (`salon_app`.`transactions`, CONSTRAINT `fk_transactions_business` "
                "FOREIGN KEY (`bid`) REFERENCES `business` (`bid`))",
            )
        )

        assert violation.kind == FOREIGN_KEY
        assert violation.constraint == "fk_transactions_business"

    def test_sqlite_message(self):
        violation = classify(
            self._wrap(IntegrityError, "UNIQUE constraint failed: industries.name")
        )

        assert violation.kind == UNIQUE
        assert violation.constraint == "industries.name"

    def test_not_a_violation(self):
        assert classify(self._wrap(OperationalError, 2006, "MySQL server has gone away")) is None
