"""User profile API routes."""

import logging

from flask import Blueprint, current_app, jsonify, request
from marshmallow import EXCLUDE, Schema, ValidationError, fields

from profiles.domain.errors import ErrorKind, ProfileError
from profiles.services import UserService

bp = Blueprint("users", __name__, url_prefix="/api/users")
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_FIELD: 400,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_EMAIL: 409,
    ErrorKind.PERSISTENCE_FAILURE: 503,
}


class UserPayloadSchema(Schema):
    """Shape of create/update bodies.

    Only types are checked here; emptiness and ranges belong to the domain
    validator so every entry point reports the same messages.
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(load_default=None, allow_none=True)
    email = fields.Str(load_default=None, allow_none=True)
    age = fields.Int(load_default=None, allow_none=True, strict=True)


payload_schema = UserPayloadSchema()


def _service() -> UserService:
    return current_app.extensions["user_service"]


def _load_payload():
    if not request.is_json:
        return None, (jsonify({
            "error": "Content-Type must be application/json",
            "code": "INVALID_CONTENT_TYPE"
        }), 400)

    json_data = request.get_json(silent=True)
    if not isinstance(json_data, dict):
        return None, (jsonify({"error": "No JSON object provided", "code": "NO_JSON_DATA"}), 400)

    try:
        return payload_schema.load(json_data), None
    except ValidationError as err:
        logger.warning(f"Rejected user payload: {err.messages}")
        return None, (jsonify({
            "error": "Invalid request body",
            "code": ErrorKind.INVALID_FIELD.value,
            "details": err.messages
        }), 400)


@bp.errorhandler(ProfileError)
def handle_profile_error(error: ProfileError):
    status = STATUS_BY_KIND.get(error.kind, 500)
    if status >= 500:
        logger.error(f"{error.kind.value}: {error.message}")
    return jsonify({"error": error.message, "code": error.kind.value}), status


@bp.route("", methods=["POST"])
def create_user():
    """Create a user profile."""
    data, error_response = _load_payload()
    if error_response:
        return error_response

    service = _service()
    user_id = service.create(data["name"], data["email"], data["age"])
    user = service.get_by_id(user_id)
    body = user.to_dict() if user else {"id": user_id}
    return jsonify(body), 201


@bp.route("", methods=["GET"])
def list_users():
    """List all user profiles."""
    users = _service().list_all()
    return jsonify({
        "users": [user.to_dict() for user in users],
        "total": len(users)
    })


@bp.route("/<int:user_id>", methods=["GET"])
def get_user(user_id: int):
    """Get user profile by ID."""
    user = _service().get_by_id(user_id)
    if user is None:
        return jsonify({
            "error": f"User profile with id {user_id} not found",
            "code": ErrorKind.NOT_FOUND.value
        }), 404
    return jsonify(user.to_dict())


@bp.route("/<int:user_id>", methods=["PUT"])
def update_user(user_id: int):
    """Replace name, email and age of a user profile."""
    data, error_response = _load_payload()
    if error_response:
        return error_response

    service = _service()
    service.update(user_id, data["name"], data["email"], data["age"])
    user = service.get_by_id(user_id)
    body = user.to_dict() if user else {"id": user_id}
    return jsonify(body)


@bp.route("/<int:user_id>", methods=["DELETE"])
def delete_user(user_id: int):
    """Delete a user profile."""
    deleted = _service().delete(user_id)
    return jsonify({"deleted": deleted})
