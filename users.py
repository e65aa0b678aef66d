import logging

from flask import Blueprint, jsonify, request
from pymongo.errors import DuplicateKeyError

from database import USERS, get_db, now, serialize, to_object_id
from errors import BadRequest, NotFound, json_object, require_fields
from find import find_donors
from listing import paginate, pagination_args

logger = logging.getLogger(__name__)

bp = Blueprint("users", __name__)

USER_ROLES = ("donor", "volunteer", "admin")
USER_STATUSES = ("active", "pending", "blocked")
USERS_PER_PAGE = 6


def check_enums(data):
    if "role" in data and data["role"] not in USER_ROLES:
        raise BadRequest("Invalid role value")
    if "status" in data and data["status"] not in USER_STATUSES:
        raise BadRequest("Invalid status value")


# =======================
# Registration & self-service
# =======================
@bp.route("/register", methods=["POST"])
def register():
    user_data = json_object(request)
    require_fields(user_data, "email")
    user_data.pop("_id", None)

    users_col = get_db()[USERS]
    if users_col.find_one({"email": user_data["email"]}):
        raise BadRequest("User already exists")

    user_data.setdefault("role", "donor")
    user_data.setdefault("status", "active")
    check_enums(user_data)
    user_data["createdAt"] = now()
    try:
        result = users_col.insert_one(user_data)
    except DuplicateKeyError:
        raise BadRequest("User already exists")
    logger.info("Registered user %s", result.inserted_id)

    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "insertedId": str(result.inserted_id),
    }), 201


@bp.route("/users/<email>", methods=["GET"])
def get_user(email):
    user = get_db()[USERS].find_one({"email": email})
    if not user:
        raise NotFound("User not found")
    return jsonify(serialize(user))


@bp.route("/users/<email>", methods=["PUT"])
def update_user(email):
    updated_data = json_object(request)
    updated_data.pop("_id", None)
    if not updated_data:
        raise BadRequest("No fields to update")
    check_enums(updated_data)

    updated_data["updatedAt"] = now()
    result = get_db()[USERS].update_one({"email": email}, {"$set": updated_data})
    if result.matched_count == 0:
        raise NotFound("User not found")
    return jsonify({"success": True, "message": "User updated successfully"})


# =======================
# Administration
# =======================
@bp.route("/users", methods=["GET"])
def list_users():
    page, limit = pagination_args(request.args, USERS_PER_PAGE)
    filters = {"status": request.args.get("status")}
    return jsonify(paginate(get_db()[USERS], filters, page, limit))


@bp.route("/user/<user_id>", methods=["PUT"])
def admin_update_user(user_id):
    """Change a user's role and/or status."""
    data = json_object(request)
    check_enums(data)
    update = {key: data[key] for key in ("role", "status") if key in data}
    if not update:
        raise BadRequest("Nothing to update: provide role or status")

    update["updatedAt"] = now()
    result = get_db()[USERS].update_one({"_id": to_object_id(user_id)}, {"$set": update})
    if result.matched_count == 0:
        raise NotFound("User not found")
    return jsonify({"success": True, "message": "User updated successfully"})


# =======================
# Donors
# =======================
@bp.route("/donors", methods=["GET"])
def donors():
    return jsonify(find_donors(
        get_db(),
        blood_group=request.args.get("bloodGroup"),
        district=request.args.get("district"),
        upazila=request.args.get("upazila"),
    ))


@bp.route("/total-donors", methods=["GET"])
def total_donors():
    return jsonify({"totalDonors": get_db()[USERS].count_documents({"role": "donor"})})
