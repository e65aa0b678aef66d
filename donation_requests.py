import logging

from flask import Blueprint, jsonify, request

from database import DONATION_REQUESTS, get_db, now, serialize, to_object_id
from errors import BadRequest, NotFound, json_object, require_fields
from listing import paginate, pagination_args
from send_email import send_request_confirmation

logger = logging.getLogger(__name__)

bp = Blueprint("donation_requests", __name__)

DONATION_STATUSES = ("pending", "inprogress", "done", "canceled")
REQUESTS_PER_PAGE = 5


def check_status(status):
    if status not in DONATION_STATUSES:
        raise BadRequest("Invalid status value")
    return status


@bp.route("/donation-requests", methods=["POST"])
def create_donation_request():
    donation_request = json_object(request)
    require_fields(donation_request, "requesterEmail")
    donation_request.pop("_id", None)
    check_status(donation_request.setdefault("donationStatus", "pending"))

    stamp = now()
    donation_request["createdAt"] = stamp
    donation_request["updatedAt"] = stamp
    result = get_db()[DONATION_REQUESTS].insert_one(donation_request)
    logger.info("Created donation request %s for %s", result.inserted_id, donation_request["requesterEmail"])

    send_request_confirmation(donation_request)

    return jsonify({
        "success": True,
        "message": "Donation request created successfully!",
        "insertedId": str(result.inserted_id),
    }), 201


# =======================
# Listings
# =======================
@bp.route("/donation-requests/<email>", methods=["GET"])
def my_donation_requests(email):
    page, limit = pagination_args(request.args, REQUESTS_PER_PAGE)
    filters = {"requesterEmail": email, "donationStatus": request.args.get("status")}
    return jsonify(paginate(get_db()[DONATION_REQUESTS], filters, page, limit))


@bp.route("/all-donation-requests", methods=["GET"])
def all_donation_requests():
    page, limit = pagination_args(request.args, REQUESTS_PER_PAGE)
    status = request.args.get("status")
    filters = {"donationStatus": status.lower() if status else None}
    return jsonify(paginate(get_db()[DONATION_REQUESTS], filters, page, limit))


@bp.route("/donation-requests-pending", methods=["GET"])
def pending_donation_requests():
    cursor = get_db()[DONATION_REQUESTS].find({"donationStatus": "pending"})
    return jsonify([serialize(d) for d in cursor])


@bp.route("/total-donation-requests", methods=["GET"])
def total_donation_requests():
    return jsonify({"totalDonationRequests": get_db()[DONATION_REQUESTS].count_documents({})})


# =======================
# Single request
# =======================
@bp.route("/donation-request/<request_id>", methods=["GET"])
def get_donation_request(request_id):
    donation_request = get_db()[DONATION_REQUESTS].find_one({"_id": to_object_id(request_id)})
    if not donation_request:
        raise NotFound("Donation request not found")
    return jsonify(serialize(donation_request))


@bp.route("/donation-requests/<request_id>", methods=["PUT"])
def update_donation_request(request_id):
    updated_data = json_object(request)
    for key in ("_id", "createdAt"):
        updated_data.pop(key, None)
    if not updated_data:
        raise BadRequest("No fields to update")
    if "donationStatus" in updated_data:
        check_status(updated_data["donationStatus"])

    updated_data["updatedAt"] = now()
    result = get_db()[DONATION_REQUESTS].update_one(
        {"_id": to_object_id(request_id)}, {"$set": updated_data}
    )
    if result.matched_count == 0:
        raise NotFound("Donation request not found")
    return jsonify({"success": True, "message": "Donation request updated successfully"})


@bp.route("/donation-requests/<request_id>/status", methods=["PATCH"])
def update_donation_status(request_id):
    """Move a request to any status in DONATION_STATUSES."""
    status = check_status(json_object(request).get("status"))
    result = get_db()[DONATION_REQUESTS].update_one(
        {"_id": to_object_id(request_id)},
        {"$set": {"donationStatus": status, "updatedAt": now()}},
    )
    if result.matched_count == 0:
        raise NotFound("Donation request not found")
    return jsonify({"success": True, "message": f"Donation status updated to {status}"})


@bp.route("/donation-requests/<request_id>", methods=["DELETE"])
def delete_donation_request(request_id):
    result = get_db()[DONATION_REQUESTS].delete_one({"_id": to_object_id(request_id)})
    if result.deleted_count == 0:
        raise NotFound("Donation request not found")
    logger.info("Deleted donation request %s", request_id)
    return jsonify({"success": True, "message": "Donation request deleted successfully"})
