"""
Swagger/OpenAPI configuration for the salon_app data API
"""

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec",
            "route": "/apispec.json",
            "rule_filter": lambda rule: True,
            "model_filter": lambda tag: True,
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/api/docs",
}

SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Salon App Data API",
        "description": "Create/read/update/delete access to every salon_app table. "
        "All invariants are enforced by the database; rejected writes come back "
        "as constraint violations.",
        "version": "1.0.0",
    },
    "host": "",
    "basePath": "/",
    "schemes": ["http", "https"],
    "tags": [
        {"name": "Users", "description": "Users, roles and role assignments"},
        {"name": "Customers", "description": "Customer profiles, favorites, email preferences"},
        {"name": "Salons", "description": "Businesses, addresses and hours of operation"},
        {"name": "Employees", "description": "Employees, skills, schedules and portfolios"},
        {"name": "Services", "description": "Services and service categories"},
        {"name": "Appointments", "description": "Appointments, notes and status changes"},
        {"name": "Loyalty", "description": "Loyalty programs, rewards, promotions, balances"},
        {"name": "Products", "description": "Products sold by salons"},
        {"name": "Cart", "description": "Customer carts"},
        {"name": "Payments", "description": "Payment methods and transactions"},
        {"name": "Reviews", "description": "Reviews and replies"},
        {"name": "Analytics", "description": "Visit history, monthly rollups and audit log"},
        {"name": "Utility", "description": "Health check"},
    ],
    "definitions": {
        "Error": {
            "type": "object",
            "properties": {
                "status": {"type": "string", "example": "error"},
                "message": {"type": "string"},
                "kind": {
                    "type": "string",
                    "enum": ["foreign_key", "check", "unique", "not_null"],
                },
                "constraint": {"type": "string"},
                "details": {"type": "string"},
            },
        },
        "Success": {
            "type": "object",
            "properties": {
                "status": {"type": "string", "example": "success"},
                "message": {"type": "string"},
                "data": {"type": "object"},
            },
        },
    },
}
