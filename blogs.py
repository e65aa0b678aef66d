import logging

from flask import Blueprint, jsonify, request

from database import BLOGS, get_db, now, serialize, to_object_id
from errors import BadRequest, NotFound, json_object, require_fields
from listing import paginate, pagination_args

logger = logging.getLogger(__name__)

bp = Blueprint("blogs", __name__)

BLOG_STATUSES = ("draft", "published")
BLOGS_PER_PAGE = 6


def check_status(status):
    if status not in BLOG_STATUSES:
        raise BadRequest("Invalid status value")
    return status


@bp.route("/blogs", methods=["POST"])
def create_blog():
    blog = json_object(request)
    require_fields(blog, "title", "content", "thumbnail")
    blog.pop("_id", None)
    check_status(blog.setdefault("status", "draft"))

    stamp = now()
    blog["createdAt"] = stamp
    blog["updatedAt"] = stamp
    result = get_db()[BLOGS].insert_one(blog)
    logger.info("Created blog %s", result.inserted_id)

    return jsonify({
        "success": True,
        "message": "Blog created successfully",
        "insertedId": str(result.inserted_id),
    }), 201


@bp.route("/blogs", methods=["GET"])
def list_blogs():
    page, limit = pagination_args(request.args, BLOGS_PER_PAGE)
    filters = {"status": request.args.get("status")}
    return jsonify(paginate(get_db()[BLOGS], filters, page, limit))


@bp.route("/published-blogs", methods=["GET"])
def published_blogs():
    page, limit = pagination_args(request.args, BLOGS_PER_PAGE)
    return jsonify(paginate(get_db()[BLOGS], {"status": "published"}, page, limit))


@bp.route("/blogs/<blog_id>", methods=["GET"])
def get_blog(blog_id):
    blog = get_db()[BLOGS].find_one({"_id": to_object_id(blog_id)})
    if not blog:
        raise NotFound("Blog not found")
    return jsonify(serialize(blog))


@bp.route("/blogs/<blog_id>", methods=["PUT"])
def update_blog(blog_id):
    updated_data = json_object(request)
    for key in ("_id", "createdAt"):
        updated_data.pop(key, None)
    if not updated_data:
        raise BadRequest("No fields to update")
    if "status" in updated_data:
        check_status(updated_data["status"])

    updated_data["updatedAt"] = now()
    result = get_db()[BLOGS].update_one({"_id": to_object_id(blog_id)}, {"$set": updated_data})
    if result.matched_count == 0:
        raise NotFound("Blog not found")
    return jsonify({"success": True, "message": "Blog updated successfully"})


@bp.route("/blog-status/<blog_id>", methods=["PUT"])
def update_blog_status(blog_id):
    status = check_status(json_object(request).get("status"))
    result = get_db()[BLOGS].update_one(
        {"_id": to_object_id(blog_id)},
        {"$set": {"status": status, "updatedAt": now()}},
    )
    if result.matched_count == 0:
        raise NotFound("Blog not found")
    return jsonify({"success": True, "message": f"Blog {status}"})


@bp.route("/blogs/<blog_id>", methods=["DELETE"])
def delete_blog(blog_id):
    result = get_db()[BLOGS].delete_one({"_id": to_object_id(blog_id)})
    if result.deleted_count == 0:
        raise NotFound("Blog not found")
    logger.info("Deleted blog %s", blog_id)
    return jsonify({"success": True, "message": "Blog deleted successfully"})
