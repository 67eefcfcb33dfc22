from datetime import datetime

from flask import Blueprint, current_app, jsonify, request

from ..errors import (
    ConstraintViolation,
    InvalidField,
    InvalidStatusTransition,
    RecordNotFound,
)
from ..extensions import db
from ..models import Appointments
from ..services import appointments as appointment_status
from ..services.repository import Repository
from ..utils.serialize import to_dict
from .resources import error_response, violation_response

appointment_status_bp = Blueprint(
    "appointment_status", __name__, url_prefix="/api/appointments"
)


@appointment_status_bp.route("/<int:aid>/status", methods=["POST"])
def change_status(aid):
    """
    Move an appointment to a new status
    ---
    tags:
      - Appointments
    parameters:
      - name: aid
        in: path
        type: integer
        required: true
      - name: body
        in: body
        required: true
        schema:
          type: object
          required: [status]
          properties:
            status:
              type: string
              enum: [upcoming, pending_payment, completed, rescheduled, cancelled, no_show]
    responses:
      200:
        description: Status changed
      404:
        description: Appointment not found
      409:
        description: Transition not allowed from the current status
    """
    data = request.get_json(silent=True) or {}
    target = data.get("status")
    if not target:
        return error_response("Missing required field: status", 400)

    repo = Repository(Appointments)
    try:
        appointment = repo.get(aid)
        appointment_status.transition(appointment, target)
        repo.commit("update")
        return (
            jsonify(
                {
                    "status": "success",
                    "message": f"Appointment {aid} is now {target}",
                    "data": to_dict(appointment),
                }
            ),
            200,
        )
    except RecordNotFound as e:
        return error_response(str(e), 404)
    except InvalidStatusTransition as e:
        db.session.rollback()
        return error_response(
            str(e),
            409,
            current=e.current,
            allowed=sorted(appointment_status.TRANSITIONS.get(e.current, ())),
        )
    except InvalidField as e:
        db.session.rollback()
        return error_response(str(e), 400)
    except ConstraintViolation as e:
        return violation_response(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to change status of appointment {aid}: {e}")
        return error_response("Failed to change appointment status", 500)


@appointment_status_bp.route("/<int:aid>/reschedule", methods=["POST"])
def reschedule_appointment(aid):
    """
    Move an appointment to a new time slot
    ---
    tags:
      - Appointments
    parameters:
      - name: aid
        in: path
        type: integer
        required: true
      - name: body
        in: body
        required: true
        schema:
          type: object
          required: [start_time, expected_end_time]
          properties:
            start_time:
              type: string
              format: date-time
            expected_end_time:
              type: string
              format: date-time
    responses:
      200:
        description: Appointment rescheduled
      400:
        description: Bad times
      409:
        description: Appointment can no longer be rescheduled
    """
    data = request.get_json(silent=True) or {}
    try:
        start_time = datetime.fromisoformat(data["start_time"])
        expected_end_time = datetime.fromisoformat(data["expected_end_time"])
    except KeyError as e:
        return error_response(f"Missing required field: {e.args[0]}", 400)
    except (TypeError, ValueError):
        return error_response("Times must be ISO 8601 date-times", 400)

    repo = Repository(Appointments)
    try:
        appointment = repo.get(aid)
        appointment_status.reschedule(appointment, start_time, expected_end_time)
        repo.commit("update")
        return jsonify({"status": "success", "data": to_dict(appointment)}), 200
    except RecordNotFound as e:
        return error_response(str(e), 404)
    except InvalidStatusTransition as e:
        db.session.rollback()
        return error_response(str(e), 409, current=e.current)
    except InvalidField as e:
        db.session.rollback()
        return error_response(str(e), 400)
    except ConstraintViolation as e:
        return violation_response(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to reschedule appointment {aid}: {e}")
        return error_response("Failed to reschedule appointment", 500)
