"""
CRUD endpoints for every exposed table.

One blueprint per table, mounted at ``/api/<table>``:

    GET    /api/<table>?col=value&limit=&offset=
    POST   /api/<table>
    GET    /api/<table>/<pk>
    PATCH  /api/<table>/<pk>
    DELETE /api/<table>/<pk>

Composite keys are written in key column order separated by commas, e.g.
``/api/users_roles/3,1``. Binary columns travel as base64 strings.
"""

from flask import Blueprint, current_app, jsonify, request
from flasgger import swag_from

from ..errors import ConstraintViolation, InvalidField, RecordNotFound, UNIQUE
from ..extensions import db
from ..models import (
    ActiveUsersMonthly,
    Addresses,
    AppointmentNotes,
    Appointments,
    Audit,
    Business,
    Cart,
    CustomerLoyaltyPoints,
    Customers,
    EmailSubscription,
    Employee,
    EmployeeServices,
    EmployeeWorkPictures,
    HoursOfOperation,
    Industries,
    LoyaltyPoints,
    LoyaltyPrograms,
    LoyaltyTransactions,
    MonthlyRevenue,
    NewUsersMonthly,
    PaymentInformation,
    Products,
    Promotions,
    ReviewReplies,
    Reviews,
    Rewards,
    Roles,
    SavedBusiness,
    SavedEmployee,
    Schedule,
    ServiceCategories,
    Services,
    Transactions,
    TransactionsProducts,
    Users,
    UsersRoles,
    VisitHistory,
)
from ..services.repository import Repository
from ..utils.serialize import to_dict


class Resource:
    def __init__(self, model, tag, readonly=False, readonly_fields=()):
        self.model = model
        self.name = model.__tablename__
        self.tag = tag
        self.readonly = readonly
        self.readonly_fields = tuple(readonly_fields)

    def repository(self):
        return Repository(self.model, readonly=self.readonly_fields)


RESOURCES = [
    Resource(Users, "Users"),
    Resource(Roles, "Users", readonly=True),
    Resource(UsersRoles, "Users"),
    Resource(Industries, "Customers"),
    Resource(Customers, "Customers"),
    Resource(EmailSubscription, "Customers"),
    Resource(Addresses, "Salons"),
    Resource(Business, "Salons"),
    Resource(HoursOfOperation, "Salons"),
    Resource(Employee, "Employees"),
    Resource(ServiceCategories, "Services"),
    Resource(Services, "Services"),
    Resource(EmployeeServices, "Employees"),
    Resource(Schedule, "Employees"),
    Resource(EmployeeWorkPictures, "Employees"),
    # status only moves through /api/appointments/<aid>/status
    Resource(Appointments, "Appointments", readonly_fields=("status",)),
    Resource(AppointmentNotes, "Appointments"),
    Resource(LoyaltyPoints, "Loyalty"),
    Resource(LoyaltyPrograms, "Loyalty"),
    Resource(Promotions, "Loyalty"),
    Resource(Rewards, "Loyalty"),
    Resource(CustomerLoyaltyPoints, "Loyalty"),
    Resource(Products, "Products"),
    Resource(Cart, "Cart"),
    Resource(PaymentInformation, "Payments"),
    Resource(Transactions, "Payments"),
    Resource(TransactionsProducts, "Payments"),
    Resource(LoyaltyTransactions, "Loyalty"),
    Resource(Reviews, "Reviews"),
    Resource(ReviewReplies, "Reviews"),
    Resource(SavedBusiness, "Customers"),
    Resource(SavedEmployee, "Customers"),
    Resource(VisitHistory, "Analytics"),
    Resource(NewUsersMonthly, "Analytics", readonly=True),
    Resource(ActiveUsersMonthly, "Analytics", readonly=True),
    Resource(MonthlyRevenue, "Analytics"),
    Resource(Audit, "Analytics", readonly=True),
]


def error_response(message, status, **extra):
    return jsonify({"status": "error", "message": message, **extra}), status


def violation_response(violation: ConstraintViolation):
    status = 409 if violation.kind == UNIQUE else 400
    return error_response("Constraint violation", status, **violation.to_dict())


def parse_pk(raw):
    return tuple(raw.split(","))


def _spec(resource, summary, path_key=False, body=False, query=False):
    parameters = []
    if path_key:
        parameters.append(
            {
                "name": "pk",
                "in": "path",
                "type": "string",
                "required": True,
                "description": "Primary key; composite keys comma separated",
            }
        )
    if body:
        parameters.append(
            {
                "name": "body",
                "in": "body",
                "required": True,
                "schema": {"type": "object"},
            }
        )
    if query:
        parameters += [
            {"name": "limit", "in": "query", "type": "integer"},
            {"name": "offset", "in": "query", "type": "integer"},
        ]
    return {
        "tags": [resource.tag],
        "summary": summary,
        "parameters": parameters,
        "responses": {
            "200": {"description": "Success"},
            "400": {"description": "Invalid input or constraint violation"},
            "404": {"description": "Not found"},
        },
    }


def make_blueprint(resource: Resource):
    bp = Blueprint(resource.name, __name__, url_prefix=f"/api/{resource.name}")

    @bp.route("", methods=["GET"])
    @swag_from(_spec(resource, f"List {resource.name}", query=True))
    def list_rows():
        filters = request.args.to_dict()
        try:
            limit = int(
                filters.pop("limit", current_app.config.get("DEFAULT_PAGE_SIZE", 100))
            )
            offset = int(filters.pop("offset", 0))
        except ValueError:
            return error_response("limit and offset must be integers", 400)
        if limit < 0 or offset < 0:
            return error_response("limit and offset must not be negative", 400)

        try:
            rows = resource.repository().list(filters, limit=limit, offset=offset)
            return (
                jsonify(
                    {
                        "status": "success",
                        "count": len(rows),
                        resource.name: [to_dict(row) for row in rows],
                    }
                ),
                200,
            )
        except InvalidField as e:
            return error_response(str(e), 400)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to list {resource.name}: {e}")
            return error_response(f"Failed to list {resource.name}", 500)

    @bp.route("/<path:pk>", methods=["GET"])
    @swag_from(_spec(resource, f"Get one {resource.name} row", path_key=True))
    def get_row(pk):
        try:
            row = resource.repository().get(parse_pk(pk))
            return jsonify({"status": "success", "data": to_dict(row)}), 200
        except RecordNotFound as e:
            return error_response(str(e), 404)
        except InvalidField as e:
            return error_response(str(e), 400)

    if resource.readonly:
        return bp

    @bp.route("", methods=["POST"])
    @swag_from(_spec(resource, f"Create a {resource.name} row", body=True))
    def create_row():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return error_response("Request body must be a JSON object", 400)

        try:
            row = resource.repository().create(data)
            return (
                jsonify(
                    {
                        "status": "success",
                        "message": f"{resource.name} row created",
                        "data": to_dict(row),
                    }
                ),
                201,
            )
        except InvalidField as e:
            return error_response(str(e), 400)
        except ConstraintViolation as e:
            current_app.logger.info(f"{resource.name} insert rejected: {e}")
            return violation_response(e)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to create {resource.name} row: {e}")
            return error_response(f"Failed to create {resource.name} row", 500)

    @bp.route("/<path:pk>", methods=["PATCH"])
    @swag_from(
        _spec(resource, f"Update a {resource.name} row", path_key=True, body=True)
    )
    def update_row(pk):
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data:
            return error_response("Request body must be a non-empty JSON object", 400)

        try:
            row = resource.repository().update(parse_pk(pk), data)
            return jsonify({"status": "success", "data": to_dict(row)}), 200
        except RecordNotFound as e:
            return error_response(str(e), 404)
        except InvalidField as e:
            return error_response(str(e), 400)
        except ConstraintViolation as e:
            current_app.logger.info(f"{resource.name} update rejected: {e}")
            return violation_response(e)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to update {resource.name} {pk}: {e}")
            return error_response(f"Failed to update {resource.name} row", 500)

    @bp.route("/<path:pk>", methods=["DELETE"])
    @swag_from(_spec(resource, f"Delete a {resource.name} row", path_key=True))
    def delete_row(pk):
        try:
            resource.repository().delete(parse_pk(pk))
            return (
                jsonify({"status": "success", "message": f"{resource.name} row deleted"}),
                200,
            )
        except RecordNotFound as e:
            return error_response(str(e), 404)
        except InvalidField as e:
            return error_response(str(e), 400)
        except ConstraintViolation as e:
            current_app.logger.info(f"{resource.name} delete rejected: {e}")
            return violation_response(e)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to delete {resource.name} {pk}: {e}")
            return error_response(f"Failed to delete {resource.name} row", 500)

    return bp


def resource_blueprints():
    return [make_blueprint(resource) for resource in RESOURCES]
