from typing import List, Optional

from sqlalchemy import (
    CHAR,
    DECIMAL,
    JSON,
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKeyConstraint,
    Index,
    Integer,
    LargeBinary,
    SmallInteger,
    String,
    Text,
    Time,
    func,
    text,
)
from sqlalchemy.dialects.mysql import LONGBLOB
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

Base = declarative_base()
metadata = Base.metadata

# longblob on MySQL, plain BLOB elsewhere
Blob = LargeBinary().with_variant(LONGBLOB(), "mysql")

WEEKDAYS = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)
APPOINTMENT_STATUSES = (
    "upcoming",
    "pending_payment",
    "completed",
    "rescheduled",
    "cancelled",
    "no_show",
)
ROLE_NAMES = ("customer", "business", "employee", "admin")


class Users(Base):
    """Base identity for every person; later split into roles."""

    __tablename__ = "users"

    uid = mapped_column(Integer, primary_key=True)
    first_name = mapped_column(String(128), nullable=False)
    last_name = mapped_column(String(128), nullable=False)
    phone = mapped_column(String(11))
    last_active = mapped_column(
        TIMESTAMP,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    authenticate: Mapped[List["Authenticate"]] = relationship(
        "Authenticate", uselist=True, back_populates="user", passive_deletes=True
    )
    users_roles: Mapped[List["UsersRoles"]] = relationship(
        "UsersRoles", uselist=True, back_populates="user", passive_deletes=True
    )
    customer: Mapped[Optional["Customers"]] = relationship(
        "Customers", uselist=False, back_populates="user", passive_deletes=True
    )
    employee: Mapped[List["Employee"]] = relationship(
        "Employee", uselist=True, back_populates="user", passive_deletes=True
    )
    business: Mapped[List["Business"]] = relationship(
        "Business", uselist=True, back_populates="owner", passive_deletes=True
    )
    payment_information: Mapped[List["PaymentInformation"]] = relationship(
        "PaymentInformation", uselist=True, back_populates="user", passive_deletes=True
    )
    appointment_notes: Mapped[List["AppointmentNotes"]] = relationship(
        "AppointmentNotes", uselist=True, back_populates="author", passive_deletes=True
    )
    review_replies: Mapped[List["ReviewReplies"]] = relationship(
        "ReviewReplies", uselist=True, back_populates="user", passive_deletes=True
    )


class Authenticate(Base):
    """Credentials; pw_hash is 64 hex chars, salt 32 hex chars."""

    __tablename__ = "authenticate"
    __table_args__ = (
        ForeignKeyConstraint(
            ["uid"], ["users.uid"], ondelete="CASCADE", name="fk_authenticate_user"
        ),
    )

    uid = mapped_column(Integer, primary_key=True, autoincrement=False)
    email = mapped_column(String(255), primary_key=True)
    pw_hash = mapped_column(CHAR(64), nullable=False)
    salt = mapped_column(CHAR(32), nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        TIMESTAMP,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    user: Mapped["Users"] = relationship("Users", back_populates="authenticate")


class Roles(Base):
    __tablename__ = "roles"

    rid = mapped_column(Integer, primary_key=True)
    name = mapped_column(String(128))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    users_roles: Mapped[List["UsersRoles"]] = relationship(
        "UsersRoles", uselist=True, back_populates="role", passive_deletes=True
    )


class UsersRoles(Base):
    __tablename__ = "users_roles"
    __table_args__ = (
        ForeignKeyConstraint(
            ["uid"], ["users.uid"], ondelete="CASCADE", name="fk_users_roles_user"
        ),
        ForeignKeyConstraint(
            ["rid"], ["roles.rid"], ondelete="CASCADE", name="fk_users_roles_role"
        ),
        Index("ix_users_roles_rid", "rid"),
    )

    uid = mapped_column(Integer, primary_key=True, autoincrement=False)
    rid = mapped_column(Integer, primary_key=True, autoincrement=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    user: Mapped["Users"] = relationship("Users", back_populates="users_roles")
    role: Mapped["Roles"] = relationship("Roles", back_populates="users_roles")


class Industries(Base):
    """Industries customers pick from for demographics."""

    __tablename__ = "industries"
    __table_args__ = (Index("uq_industries_name", "name", unique=True),)

    ind_id = mapped_column(Integer, primary_key=True)
    name = mapped_column(String(128), nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customers: Mapped[List["Customers"]] = relationship(
        "Customers", uselist=True, back_populates="industry", passive_deletes=True
    )


class Customers(Base):
    __tablename__ = "customers"
    __table_args__ = (
        ForeignKeyConstraint(
            ["uid"], ["users.uid"], ondelete="CASCADE", name="fk_customers_user"
        ),
        ForeignKeyConstraint(
            ["ind_id"],
            ["industries.ind_id"],
            ondelete="SET NULL",
            name="fk_customers_industry",
        ),
        Index("uq_customers_uid", "uid", unique=True),
        Index("ix_customers_ind_id", "ind_id"),
    )

    cid = mapped_column(Integer, primary_key=True)
    uid = mapped_column(Integer, nullable=False)
    birthdate = mapped_column(Date)
    gender = mapped_column(Enum("male", "female", "nonbinary", "other"))
    ind_id = mapped_column(Integer)
    income = mapped_column(DECIMAL(11, 2))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    user: Mapped["Users"] = relationship("Users", back_populates="customer")
    industry: Mapped[Optional["Industries"]] = relationship(
        "Industries", back_populates="customers"
    )
    email_subscription: Mapped[Optional["EmailSubscription"]] = relationship(
        "EmailSubscription",
        uselist=False,
        back_populates="customer",
        passive_deletes=True,
    )
    cart: Mapped[List["Cart"]] = relationship(
        "Cart", uselist=True, back_populates="customer", passive_deletes=True
    )
    appointments: Mapped[List["Appointments"]] = relationship(
        "Appointments", uselist=True, back_populates="customer", passive_deletes=True
    )
    loyalty_points: Mapped[List["CustomerLoyaltyPoints"]] = relationship(
        "CustomerLoyaltyPoints",
        uselist=True,
        back_populates="customer",
        passive_deletes=True,
    )
    reviews: Mapped[List["Reviews"]] = relationship(
        "Reviews", uselist=True, back_populates="customer", passive_deletes=True
    )
    saved_business: Mapped[List["SavedBusiness"]] = relationship(
        "SavedBusiness", uselist=True, back_populates="customer", passive_deletes=True
    )
    saved_employee: Mapped[List["SavedEmployee"]] = relationship(
        "SavedEmployee", uselist=True, back_populates="customer", passive_deletes=True
    )
    transactions: Mapped[List["Transactions"]] = relationship(
        "Transactions", uselist=True, back_populates="customer", passive_deletes=True
    )
    loyalty_transactions: Mapped[List["LoyaltyTransactions"]] = relationship(
        "LoyaltyTransactions",
        uselist=True,
        back_populates="customer",
        passive_deletes=True,
    )
    visit_history: Mapped[List["VisitHistory"]] = relationship(
        "VisitHistory", uselist=True, back_populates="customer", passive_deletes=True
    )


class EmailSubscription(Base):
    """Which kinds of email each customer wants to receive."""

    __tablename__ = "email_subscription"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="CASCADE",
            name="fk_email_subscription_customer",
        ),
    )

    cid = mapped_column(Integer, primary_key=True, autoincrement=False)
    promotion = mapped_column(Boolean, server_default=text("1"))
    appointment = mapped_column(Boolean, server_default=text("1"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship(
        "Customers", back_populates="email_subscription"
    )


class Addresses(Base):
    __tablename__ = "addresses"

    aid = mapped_column(Integer, primary_key=True)
    street = mapped_column(String(255))
    city = mapped_column(String(255))
    state = mapped_column(String(255))
    country = mapped_column(String(255))
    zip_code = mapped_column(String(255))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped[List["Business"]] = relationship(
        "Business", uselist=True, back_populates="address"
    )


class Business(Base):
    """A salon. status tracks whether it is still open."""

    __tablename__ = "business"
    __table_args__ = (
        CheckConstraint("deposit_rate < 1.000", name="ck_deposit_rate"),
        ForeignKeyConstraint(
            ["uid"], ["users.uid"], ondelete="CASCADE", name="fk_business_owner"
        ),
        ForeignKeyConstraint(["aid"], ["addresses.aid"], name="fk_business_address"),
        Index("uq_business_name", "name", unique=True),
        Index("ix_business_uid", "uid"),
        Index("ix_business_aid", "aid"),
    )

    bid = mapped_column(Integer, primary_key=True)
    uid = mapped_column(Integer, nullable=False)
    name = mapped_column(String(255), nullable=False)
    aid = mapped_column(Integer, nullable=False)
    year_est = mapped_column(Integer)
    deposit_rate = mapped_column(DECIMAL(4, 3), server_default=text("0.000"))
    status = mapped_column(Boolean, server_default=text("0"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    owner: Mapped["Users"] = relationship("Users", back_populates="business")
    address: Mapped["Addresses"] = relationship("Addresses", back_populates="business")
    hours_of_operation: Mapped[List["HoursOfOperation"]] = relationship(
        "HoursOfOperation", uselist=True, back_populates="business", passive_deletes=True
    )
    employees: Mapped[List["Employee"]] = relationship(
        "Employee", uselist=True, back_populates="business", passive_deletes=True
    )
    services: Mapped[List["Services"]] = relationship(
        "Services", uselist=True, back_populates="business", passive_deletes=True
    )
    products: Mapped[List["Products"]] = relationship(
        "Products", uselist=True, back_populates="business", passive_deletes=True
    )
    appointments: Mapped[List["Appointments"]] = relationship(
        "Appointments", uselist=True, back_populates="business", passive_deletes=True
    )
    loyalty_points: Mapped[Optional["LoyaltyPoints"]] = relationship(
        "LoyaltyPoints", uselist=False, back_populates="business", passive_deletes=True
    )
    loyalty_programs: Mapped[List["LoyaltyPrograms"]] = relationship(
        "LoyaltyPrograms", uselist=True, back_populates="business", passive_deletes=True
    )
    rewards: Mapped[List["Rewards"]] = relationship(
        "Rewards", uselist=True, back_populates="business", passive_deletes=True
    )
    reviews: Mapped[List["Reviews"]] = relationship(
        "Reviews", uselist=True, back_populates="business", passive_deletes=True
    )
    transactions: Mapped[List["Transactions"]] = relationship(
        "Transactions", uselist=True, back_populates="business"
    )
    monthly_revenue: Mapped[List["MonthlyRevenue"]] = relationship(
        "MonthlyRevenue", uselist=True, back_populates="business", passive_deletes=True
    )


class HoursOfOperation(Base):
    __tablename__ = "hours_of_operation"
    __table_args__ = (
        CheckConstraint(
            "(open_time is null and close_time is null) or "
            "(open_time is not null and close_time is not null)",
            name="ck_open_and_close",
        ),
        CheckConstraint(
            "open_time < close_time or is_closed = true", name="ck_closed_logic"
        ),
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_hours_of_operation_business",
        ),
        Index("uq_hours_business_day", "bid", "day", unique=True),
    )

    id = mapped_column(Integer, primary_key=True)
    bid = mapped_column(Integer, nullable=False)
    day = mapped_column(Enum(*WEEKDAYS))
    open_time = mapped_column(Time)
    close_time = mapped_column(Time)
    is_closed = mapped_column(Boolean, server_default=text("0"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped["Business"] = relationship(
        "Business", back_populates="hours_of_operation"
    )


class Employee(Base):
    __tablename__ = "employee"
    __table_args__ = (
        ForeignKeyConstraint(
            ["uid"], ["users.uid"], ondelete="CASCADE", name="fk_employee_user"
        ),
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], ondelete="SET NULL", name="fk_employee_business"
        ),
        Index("ix_employee_uid", "uid"),
        Index("ix_employee_bid", "bid"),
    )

    eid = mapped_column(Integer, primary_key=True)
    uid = mapped_column(Integer, nullable=False)
    bid = mapped_column(Integer)
    bio = mapped_column(Text)
    profile_picture = mapped_column(Blob)
    approved = mapped_column(Boolean, server_default=text("0"))
    start_year = mapped_column(Integer)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    user: Mapped["Users"] = relationship("Users", back_populates="employee")
    business: Mapped[Optional["Business"]] = relationship(
        "Business", back_populates="employees"
    )
    services: Mapped[List["EmployeeServices"]] = relationship(
        "EmployeeServices", uselist=True, back_populates="employee", passive_deletes=True
    )
    schedule: Mapped[List["Schedule"]] = relationship(
        "Schedule", uselist=True, back_populates="employee", passive_deletes=True
    )
    work_pictures: Mapped[List["EmployeeWorkPictures"]] = relationship(
        "EmployeeWorkPictures",
        uselist=True,
        back_populates="employee",
        passive_deletes=True,
    )
    appointments: Mapped[List["Appointments"]] = relationship(
        "Appointments", uselist=True, back_populates="employee", passive_deletes=True
    )
    reviews: Mapped[List["Reviews"]] = relationship(
        "Reviews", uselist=True, back_populates="employee", passive_deletes=True
    )
    saved_by: Mapped[List["SavedEmployee"]] = relationship(
        "SavedEmployee", uselist=True, back_populates="employee", passive_deletes=True
    )


class ServiceCategories(Base):
    __tablename__ = "service_categories"

    cat_id = mapped_column(Integer, primary_key=True)
    name = mapped_column(String(50), nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    services: Mapped[List["Services"]] = relationship(
        "Services", uselist=True, back_populates="category", passive_deletes=True
    )


class Services(Base):
    __tablename__ = "services"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cat_id"],
            ["service_categories.cat_id"],
            ondelete="CASCADE",
            name="fk_services_category",
        ),
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], ondelete="CASCADE", name="fk_services_business"
        ),
        Index("ix_services_bid", "bid"),
        Index("ix_services_cat_id", "cat_id"),
    )

    sid = mapped_column(Integer, primary_key=True)
    bid = mapped_column(Integer)
    name = mapped_column(String(50), nullable=False)
    cat_id = mapped_column(Integer, nullable=False)
    price = mapped_column(DECIMAL(6, 2))
    duration = mapped_column(Integer, comment="Minutes the service takes")
    description = mapped_column(String(255))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped[Optional["Business"]] = relationship(
        "Business", back_populates="services"
    )
    category: Mapped["ServiceCategories"] = relationship(
        "ServiceCategories", back_populates="services"
    )
    employees: Mapped[List["EmployeeServices"]] = relationship(
        "EmployeeServices", uselist=True, back_populates="service", passive_deletes=True
    )
    appointments: Mapped[List["Appointments"]] = relationship(
        "Appointments", uselist=True, back_populates="service", passive_deletes=True
    )


class EmployeeServices(Base):
    """Services an employee is skilled to perform."""

    __tablename__ = "employee_services"
    __table_args__ = (
        ForeignKeyConstraint(
            ["eid"],
            ["employee.eid"],
            ondelete="CASCADE",
            name="fk_employee_services_employee",
        ),
        ForeignKeyConstraint(
            ["sid"],
            ["services.sid"],
            ondelete="CASCADE",
            name="fk_employee_services_service",
        ),
        Index("ix_employee_services_sid", "sid"),
    )

    eid = mapped_column(Integer, primary_key=True, autoincrement=False)
    sid = mapped_column(Integer, primary_key=True, autoincrement=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    employee: Mapped["Employee"] = relationship("Employee", back_populates="services")
    service: Mapped["Services"] = relationship("Services", back_populates="employees")


class Schedule(Base):
    __tablename__ = "schedule"
    __table_args__ = (
        ForeignKeyConstraint(
            ["eid"], ["employee.eid"], ondelete="CASCADE", name="fk_schedule_employee"
        ),
        Index("ix_schedule_eid_day", "eid", "day"),
    )

    sched_id = mapped_column(Integer, primary_key=True)
    eid = mapped_column(Integer, nullable=False)
    day = mapped_column(Enum(*WEEKDAYS))
    start_time = mapped_column(Time)
    finish_time = mapped_column(Time)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    employee: Mapped["Employee"] = relationship("Employee", back_populates="schedule")


class EmployeeWorkPictures(Base):
    """Portfolio pictures of an employee's work."""

    __tablename__ = "employee_work_pictures"
    __table_args__ = (
        ForeignKeyConstraint(
            ["eid"],
            ["employee.eid"],
            ondelete="CASCADE",
            name="fk_employee_work_pictures_employee",
        ),
        Index("ix_employee_work_pictures_eid", "eid"),
    )

    id = mapped_column(Integer, primary_key=True)
    eid = mapped_column(Integer, nullable=False)
    picture = mapped_column(Blob)
    active = mapped_column(Boolean, server_default=text("1"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="work_pictures"
    )


class Appointments(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="SET NULL",
            name="fk_appointments_customer",
        ),
        ForeignKeyConstraint(
            ["eid"],
            ["employee.eid"],
            ondelete="SET NULL",
            name="fk_appointments_employee",
        ),
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="SET NULL",
            name="fk_appointments_business",
        ),
        ForeignKeyConstraint(
            ["sid"],
            ["services.sid"],
            ondelete="SET NULL",
            name="fk_appointments_service",
        ),
        Index("ix_appointments_cid_start", "cid", "start_time"),
        Index("ix_appointments_eid_start", "eid", "start_time"),
        Index("ix_appointments_bid_start", "bid", "start_time"),
        Index("ix_appointments_sid", "sid"),
        Index("ix_appointments_status_end", "status", "expected_end_time"),
    )

    aid = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer)
    eid = mapped_column(Integer)
    bid = mapped_column(Integer)
    sid = mapped_column(Integer)
    status = mapped_column(
        Enum(*APPOINTMENT_STATUSES), server_default=text("'upcoming'")
    )
    start_time = mapped_column(TIMESTAMP, nullable=False)
    expected_end_time = mapped_column(TIMESTAMP, nullable=False)
    end_time = mapped_column(TIMESTAMP, nullable=True)
    before_image = mapped_column(Blob)
    after_image = mapped_column(Blob)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped[Optional["Customers"]] = relationship(
        "Customers", back_populates="appointments"
    )
    employee: Mapped[Optional["Employee"]] = relationship(
        "Employee", back_populates="appointments"
    )
    business: Mapped[Optional["Business"]] = relationship(
        "Business", back_populates="appointments"
    )
    service: Mapped[Optional["Services"]] = relationship(
        "Services", back_populates="appointments"
    )
    notes: Mapped[List["AppointmentNotes"]] = relationship(
        "AppointmentNotes",
        uselist=True,
        back_populates="appointment",
        passive_deletes=True,
    )
    transactions: Mapped[List["Transactions"]] = relationship(
        "Transactions", uselist=True, back_populates="appointment"
    )


class AppointmentNotes(Base):
    """Notes left on an appointment by any role."""

    __tablename__ = "appointment_notes"
    __table_args__ = (
        ForeignKeyConstraint(
            ["aid"],
            ["appointments.aid"],
            ondelete="CASCADE",
            name="fk_appointment_notes_appointment",
        ),
        ForeignKeyConstraint(
            ["author_uid"],
            ["users.uid"],
            ondelete="SET NULL",
            name="fk_appointment_notes_author",
        ),
        Index("ix_appointment_notes_aid", "aid"),
        Index("ix_appointment_notes_author", "author_uid"),
    )

    note_id = mapped_column(Integer, primary_key=True)
    aid = mapped_column(Integer, nullable=False)
    author_uid = mapped_column(Integer)
    author_role = mapped_column(String(50), nullable=False)
    note_text = mapped_column(Text, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    appointment: Mapped["Appointments"] = relationship(
        "Appointments", back_populates="notes"
    )
    author: Mapped[Optional["Users"]] = relationship(
        "Users", back_populates="appointment_notes"
    )


class LoyaltyPoints(Base):
    """Loyalty points a salon grants per dollar spent."""

    __tablename__ = "loyalty_points"
    __table_args__ = (
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_loyalty_points_business",
        ),
    )

    bid = mapped_column(Integer, primary_key=True, autoincrement=False)
    pts_value = mapped_column(DECIMAL(10, 2), server_default=text("1"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped["Business"] = relationship(
        "Business", back_populates="loyalty_points"
    )


class LoyaltyPrograms(Base):
    """
    One loyalty program of a business.

    The *_thresh flags say what the threshold counts: appointments,
    products bought, money spent or points. ``threshold`` is the number at
    which the reward is met, e.g. a free visit after 10 appointments.
    """

    __tablename__ = "loyalty_programs"
    __table_args__ = (
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_loyalty_programs_business",
        ),
        Index("ix_loyalty_programs_bid", "bid"),
    )

    lprog_id = mapped_column(Integer, primary_key=True)
    bid = mapped_column(Integer, nullable=False)
    appts_thresh = mapped_column(Boolean, server_default=text("0"))
    pdct_thresh = mapped_column(Boolean, server_default=text("0"))
    price_thresh = mapped_column(Boolean, server_default=text("0"))
    points_thresh = mapped_column(Boolean, server_default=text("0"))
    threshold = mapped_column(Integer, nullable=False)
    description = mapped_column(Text)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped["Business"] = relationship(
        "Business", back_populates="loyalty_programs"
    )
    promotions: Mapped[List["Promotions"]] = relationship(
        "Promotions", uselist=True, back_populates="program", passive_deletes=True
    )
    rewards: Mapped[List["Rewards"]] = relationship(
        "Rewards", uselist=True, back_populates="program", passive_deletes=True
    )
    loyalty_transactions: Mapped[List["LoyaltyTransactions"]] = relationship(
        "LoyaltyTransactions",
        uselist=True,
        back_populates="program",
        passive_deletes=True,
    )


class Promotions(Base):
    __tablename__ = "promotions"
    __table_args__ = (
        ForeignKeyConstraint(
            ["lprog_id"],
            ["loyalty_programs.lprog_id"],
            ondelete="CASCADE",
            name="fk_promotions_program",
        ),
        Index("ix_promotions_lprog_id", "lprog_id"),
    )

    promo_id = mapped_column(Integer, primary_key=True)
    lprog_id = mapped_column(Integer, nullable=False)
    title = mapped_column(String(128))
    start_date = mapped_column(Date, nullable=False)
    end_date = mapped_column(Date, nullable=False)
    is_recurring = mapped_column(Boolean, server_default=text("0"))
    recurr_days = mapped_column(String(255), comment="Weekdays the promo recurs on")
    start_time = mapped_column(Time)
    end_time = mapped_column(Time)
    description = mapped_column(Text)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    program: Mapped["LoyaltyPrograms"] = relationship(
        "LoyaltyPrograms", back_populates="promotions"
    )


class Rewards(Base):
    __tablename__ = "rewards"
    __table_args__ = (
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], ondelete="CASCADE", name="fk_rewards_business"
        ),
        ForeignKeyConstraint(
            ["lprog_id"],
            ["loyalty_programs.lprog_id"],
            ondelete="CASCADE",
            name="fk_rewards_program",
        ),
        Index("ix_rewards_bid", "bid"),
        Index("ix_rewards_lprog_id", "lprog_id"),
    )

    rwd_id = mapped_column(Integer, primary_key=True)
    bid = mapped_column(Integer, nullable=False)
    lprog_id = mapped_column(Integer, nullable=False)
    is_appt = mapped_column(Boolean, server_default=text("0"))
    is_product = mapped_column(Boolean, server_default=text("0"))
    is_price = mapped_column(Boolean, server_default=text("0"))
    is_points = mapped_column(Boolean, server_default=text("0"))
    is_discount = mapped_column(Boolean, server_default=text("0"))
    rwd_value = mapped_column(
        DECIMAL(5, 2), comment="e.g. 10 for 10 percent off, 1 for one free visit"
    )
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped["Business"] = relationship("Business", back_populates="rewards")
    program: Mapped["LoyaltyPrograms"] = relationship(
        "LoyaltyPrograms", back_populates="rewards"
    )


class CustomerLoyaltyPoints(Base):
    """Per customer, per business loyalty balances."""

    __tablename__ = "customer_loyalty_points"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="CASCADE",
            name="fk_customer_loyalty_points_customer",
        ),
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_customer_loyalty_points_business",
        ),
        Index("ix_customer_loyalty_points_bid", "bid"),
    )

    cid = mapped_column(Integer, primary_key=True, autoincrement=False)
    bid = mapped_column(Integer, primary_key=True, autoincrement=False)
    pts_balance = mapped_column(DECIMAL(10, 2))
    appt_complete = mapped_column(Integer)
    prod_purchased = mapped_column(Integer)
    amount_spent = mapped_column(DECIMAL(10, 2))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship(
        "Customers", back_populates="loyalty_points"
    )
    business: Mapped["Business"] = relationship("Business")


class Products(Base):
    __tablename__ = "products"
    __table_args__ = (
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], ondelete="CASCADE", name="fk_products_business"
        ),
        Index("ix_products_bid", "bid"),
    )

    pid = mapped_column(Integer, primary_key=True)
    name = mapped_column(String(255))
    bid = mapped_column(Integer, nullable=False)
    price = mapped_column(DECIMAL(5, 2), comment="Unit price")
    stock = mapped_column(Integer, server_default=text("0"))
    image = mapped_column(Blob)
    description = mapped_column(Text)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped["Business"] = relationship("Business", back_populates="products")
    cart: Mapped[List["Cart"]] = relationship(
        "Cart", uselist=True, back_populates="product", passive_deletes=True
    )
    transactions_products: Mapped[List["TransactionsProducts"]] = relationship(
        "TransactionsProducts",
        uselist=True,
        back_populates="product",
        passive_deletes=True,
    )


class Cart(Base):
    """One row per product in a customer's cart."""

    __tablename__ = "cart"
    __table_args__ = (
        ForeignKeyConstraint(
            ["pid"], ["products.pid"], ondelete="CASCADE", name="fk_cart_product"
        ),
        ForeignKeyConstraint(
            ["cid"], ["customers.cid"], ondelete="CASCADE", name="fk_cart_customer"
        ),
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], ondelete="CASCADE", name="fk_cart_business"
        ),
        # the add-to-cart path relies on this to bump amount instead of inserting
        Index("uq_cart_customer_product", "cid", "pid", unique=True),
        Index("ix_cart_pid", "pid"),
        Index("ix_cart_bid", "bid"),
    )

    cart_id = mapped_column(Integer, primary_key=True)
    pid = mapped_column(Integer, nullable=False)
    amount = mapped_column(Integer, server_default=text("1"))
    cid = mapped_column(Integer, nullable=False)
    bid = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    product: Mapped["Products"] = relationship("Products", back_populates="cart")
    customer: Mapped["Customers"] = relationship("Customers", back_populates="cart")


class PaymentInformation(Base):
    """Stored payment methods of a user."""

    __tablename__ = "payment_information"
    __table_args__ = (
        ForeignKeyConstraint(
            ["uid"],
            ["users.uid"],
            ondelete="CASCADE",
            name="fk_payment_information_user",
        ),
        Index("ix_payment_information_uid", "uid"),
    )

    id = mapped_column(Integer, primary_key=True)
    uid = mapped_column(Integer, nullable=False)
    payment_type = mapped_column(
        Enum("visa", "mastercard", "discover", "american express", "debit")
    )
    cardholder_name = mapped_column(String(128), nullable=False)
    card_number = mapped_column(String(128), nullable=False)
    cvv = mapped_column(String(4), nullable=False)
    exp_month = mapped_column(SmallInteger, nullable=False)
    exp_year = mapped_column(SmallInteger, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    user: Mapped["Users"] = relationship("Users", back_populates="payment_information")
    transactions: Mapped[List["Transactions"]] = relationship(
        "Transactions",
        uselist=True,
        back_populates="payment_method",
        passive_deletes=True,
    )


class Transactions(Base):
    """Appointment and product purchases."""

    __tablename__ = "transactions"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="SET NULL",
            name="fk_transactions_customer",
        ),
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], name="fk_transactions_business"
        ),
        ForeignKeyConstraint(
            ["aid"], ["appointments.aid"], name="fk_transactions_appointment"
        ),
        ForeignKeyConstraint(
            ["payment_method_id"],
            ["payment_information.id"],
            ondelete="SET NULL",
            name="fk_transactions_payment_method",
        ),
        Index("ix_transactions_cid", "cid"),
        Index("ix_transactions_bid_created", "bid", "created_at"),
        Index("ix_transactions_aid", "aid"),
        Index("ix_transactions_payment_method", "payment_method_id"),
    )

    trans_id = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer)
    bid = mapped_column(Integer, nullable=False)
    aid = mapped_column(Integer)
    amount = mapped_column(DECIMAL(10, 2), nullable=False)
    payment_method_id = mapped_column(Integer)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped[Optional["Customers"]] = relationship(
        "Customers", back_populates="transactions"
    )
    business: Mapped["Business"] = relationship(
        "Business", back_populates="transactions"
    )
    appointment: Mapped[Optional["Appointments"]] = relationship(
        "Appointments", back_populates="transactions"
    )
    payment_method: Mapped[Optional["PaymentInformation"]] = relationship(
        "PaymentInformation", back_populates="transactions"
    )
    products: Mapped[List["TransactionsProducts"]] = relationship(
        "TransactionsProducts",
        uselist=True,
        back_populates="transaction",
        passive_deletes=True,
    )
    loyalty_transactions: Mapped[List["LoyaltyTransactions"]] = relationship(
        "LoyaltyTransactions",
        uselist=True,
        back_populates="transaction",
        passive_deletes=True,
    )


class TransactionsProducts(Base):
    """Products in a transaction and how many of each were bought."""

    __tablename__ = "transactions_products"
    __table_args__ = (
        ForeignKeyConstraint(
            ["trans_id"],
            ["transactions.trans_id"],
            ondelete="CASCADE",
            name="fk_transactions_products_transaction",
        ),
        ForeignKeyConstraint(
            ["pid"],
            ["products.pid"],
            ondelete="SET NULL",
            name="fk_transactions_products_product",
        ),
        Index("ix_transactions_products_trans_id", "trans_id"),
        Index("ix_transactions_products_pid", "pid"),
    )

    id = mapped_column(Integer, primary_key=True)
    trans_id = mapped_column(Integer, nullable=False)
    pid = mapped_column(Integer)
    amount = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    transaction: Mapped["Transactions"] = relationship(
        "Transactions", back_populates="products"
    )
    product: Mapped[Optional["Products"]] = relationship(
        "Products", back_populates="transactions_products"
    )


class LoyaltyTransactions(Base):
    __tablename__ = "loyalty_transactions"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="CASCADE",
            name="fk_loyalty_transactions_customer",
        ),
        ForeignKeyConstraint(
            ["trans_id"],
            ["transactions.trans_id"],
            ondelete="CASCADE",
            name="fk_loyalty_transactions_transaction",
        ),
        ForeignKeyConstraint(
            ["lprog_id"],
            ["loyalty_programs.lprog_id"],
            ondelete="CASCADE",
            name="fk_loyalty_transactions_program",
        ),
        Index("ix_loyalty_transactions_cid", "cid"),
        Index("ix_loyalty_transactions_trans_id", "trans_id"),
        Index("ix_loyalty_transactions_lprog_id", "lprog_id"),
    )

    lt_id = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer, nullable=False)
    trans_id = mapped_column(Integer, nullable=False)
    lprog_id = mapped_column(Integer, nullable=False)
    val_earned = mapped_column(DECIMAL(10, 2), server_default=text("0"))
    val_redeemed = mapped_column(DECIMAL(10, 2), server_default=text("0"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship(
        "Customers", back_populates="loyalty_transactions"
    )
    transaction: Mapped["Transactions"] = relationship(
        "Transactions", back_populates="loyalty_transactions"
    )
    program: Mapped["LoyaltyPrograms"] = relationship(
        "LoyaltyPrograms", back_populates="loyalty_transactions"
    )


class Reviews(Base):
    """
    A customer's review of a salon, one of its workers, or both.

    rating is a star count from 1 to 5.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating between 1 and 5", name="ck_review_rating"),
        CheckConstraint("eid is not null or bid is not null", name="ck_rev_about"),
        ForeignKeyConstraint(
            ["cid"], ["customers.cid"], ondelete="CASCADE", name="fk_reviews_customer"
        ),
        ForeignKeyConstraint(
            ["bid"], ["business.bid"], ondelete="CASCADE", name="fk_reviews_business"
        ),
        ForeignKeyConstraint(
            ["eid"], ["employee.eid"], ondelete="CASCADE", name="fk_reviews_employee"
        ),
        Index("ix_reviews_cid", "cid"),
        Index("ix_reviews_bid_created", "bid", "created_at"),
        Index("ix_reviews_eid", "eid"),
    )

    rvw_id = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer, nullable=False)
    bid = mapped_column(Integer)
    eid = mapped_column(Integer)
    rating = mapped_column(Integer, nullable=False)
    comment = mapped_column(Text)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship("Customers", back_populates="reviews")
    business: Mapped[Optional["Business"]] = relationship(
        "Business", back_populates="reviews"
    )
    employee: Mapped[Optional["Employee"]] = relationship(
        "Employee", back_populates="reviews"
    )
    replies: Mapped[List["ReviewReplies"]] = relationship(
        "ReviewReplies", uselist=True, back_populates="review", passive_deletes=True
    )


class ReviewReplies(Base):
    """Any user, owner or worker included, can reply to a review."""

    __tablename__ = "review_replies"
    __table_args__ = (
        ForeignKeyConstraint(
            ["uid"], ["users.uid"], ondelete="CASCADE", name="fk_review_replies_user"
        ),
        ForeignKeyConstraint(
            ["rvw_id"],
            ["reviews.rvw_id"],
            ondelete="CASCADE",
            name="fk_review_replies_review",
        ),
        Index("ix_review_replies_rvw_id", "rvw_id"),
        Index("ix_review_replies_uid", "uid"),
    )

    rply_id = mapped_column(Integer, primary_key=True)
    rvw_id = mapped_column(Integer, nullable=False)
    uid = mapped_column(Integer, nullable=False)
    comment = mapped_column(Text)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    user: Mapped["Users"] = relationship("Users", back_populates="review_replies")
    review: Mapped["Reviews"] = relationship("Reviews", back_populates="replies")


class SavedBusiness(Base):
    __tablename__ = "saved_business"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="CASCADE",
            name="fk_saved_business_customer",
        ),
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_saved_business_business",
        ),
        Index("ix_saved_business_cid", "cid"),
        Index("ix_saved_business_bid", "bid"),
    )

    id = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer, nullable=False)
    bid = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship(
        "Customers", back_populates="saved_business"
    )
    business: Mapped["Business"] = relationship("Business")


class SavedEmployee(Base):
    __tablename__ = "saved_employee"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="CASCADE",
            name="fk_saved_employee_customer",
        ),
        ForeignKeyConstraint(
            ["eid"],
            ["employee.eid"],
            ondelete="CASCADE",
            name="fk_saved_employee_employee",
        ),
        Index("ix_saved_employee_cid", "cid"),
        Index("ix_saved_employee_eid", "eid"),
    )

    id = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer, nullable=False)
    eid = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship(
        "Customers", back_populates="saved_employee"
    )
    employee: Mapped["Employee"] = relationship("Employee", back_populates="saved_by")


class NewUsersMonthly(Base):
    __tablename__ = "new_users_monthly"
    __table_args__ = (
        Index("uq_new_users_monthly_period", "year", "month", unique=True),
    )

    new_users_id = mapped_column(Integer, primary_key=True)
    year = mapped_column(Integer, nullable=False)
    month = mapped_column(Integer, nullable=False)
    new_users_count = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )


class ActiveUsersMonthly(Base):
    __tablename__ = "active_users_monthly"
    __table_args__ = (
        Index("uq_active_users_monthly_period", "year", "month", unique=True),
    )

    active_users_id = mapped_column(Integer, primary_key=True)
    year = mapped_column(Integer, nullable=False)
    month = mapped_column(Integer, nullable=False)
    active_count = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )


class VisitHistory(Base):
    """How often a customer looked at a salon and its products."""

    __tablename__ = "visit_history"
    __table_args__ = (
        ForeignKeyConstraint(
            ["cid"],
            ["customers.cid"],
            ondelete="CASCADE",
            name="fk_visit_history_customer",
        ),
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_visit_history_business",
        ),
        Index("uq_visit_history_customer_business", "cid", "bid", unique=True),
        Index("ix_visit_history_bid", "bid"),
    )

    history_id = mapped_column(Integer, primary_key=True)
    cid = mapped_column(Integer, nullable=False)
    bid = mapped_column(Integer, nullable=False)
    salon_views = mapped_column(Integer, server_default=text("0"))
    product_views = mapped_column(Integer, server_default=text("0"))
    last_visit = mapped_column(
        TIMESTAMP,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    customer: Mapped["Customers"] = relationship(
        "Customers", back_populates="visit_history"
    )
    business: Mapped["Business"] = relationship("Business")


class MonthlyRevenue(Base):
    __tablename__ = "monthly_revenue"
    __table_args__ = (
        ForeignKeyConstraint(
            ["bid"],
            ["business.bid"],
            ondelete="CASCADE",
            name="fk_monthly_revenue_business",
        ),
        Index("uq_monthly_revenue_period", "bid", "year", "month", unique=True),
    )

    rev_id = mapped_column(Integer, primary_key=True)
    bid = mapped_column(Integer, nullable=False)
    year = mapped_column(Integer, nullable=False)
    month = mapped_column(Integer, nullable=False)
    revenue = mapped_column(Integer, nullable=False)
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )

    business: Mapped["Business"] = relationship(
        "Business", back_populates="monthly_revenue"
    )


class ServiceTime(Base):
    # TODO: confirm with the product owners what this table records before
    # anything reads or writes it.
    __tablename__ = "service_time"

    id = mapped_column(Integer, primary_key=True)
    start_time = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    created_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = mapped_column(
        DateTime,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.current_timestamp(),
    )


class Audit(Base):
    __tablename__ = "audit"
    __table_args__ = (
        Index("ix_audit_table_record", "table_name", "record_id"),
        {"comment": "Change log written by the application; no triggers."},
    )

    id = mapped_column(Integer, primary_key=True)
    table_name = mapped_column(String(128), nullable=False)
    record_id = mapped_column(Integer, nullable=False)
    action = mapped_column(Enum("insert", "update", "delete"), nullable=False)
    old_data = mapped_column(JSON)
    new_data = mapped_column(JSON)
    changed_at = mapped_column(TIMESTAMP, server_default=text("CURRENT_TIMESTAMP"))
    changed_by = mapped_column(String(128))
