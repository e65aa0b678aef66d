from datetime import datetime, timezone

from bson.objectid import ObjectId
import pytest


OLD_STAMP = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def blog_payload():
    return {
        "title": "Why donate blood?",
        "content": "<p>One donation can save up to three lives.</p>",
        "thumbnail": "https://i.ibb.co/blood.png",
    }


def create(client, payload):
    resp = client.post("/blogs", json=payload)
    assert resp.status_code == 201
    return resp.get_json()["insertedId"]


def test_create_defaults_to_draft(client, blog_payload):
    blog_id = create(client, blog_payload)

    blog = client.get(f"/blogs/{blog_id}").get_json()
    assert blog["_id"] == blog_id
    assert blog["title"] == blog_payload["title"]
    assert blog["status"] == "draft"
    assert blog["createdAt"] == blog["updatedAt"]


def test_create_missing_thumbnail(client, db, blog_payload):
    del blog_payload["thumbnail"]
    resp = client.post("/blogs", json=blog_payload)
    assert resp.status_code == 400
    assert "thumbnail" in resp.get_json()["message"]
    assert db["blogs"].count_documents({}) == 0


def test_create_rejects_invalid_status(client, db, blog_payload):
    blog_payload["status"] = "archived"
    assert client.post("/blogs", json=blog_payload).status_code == 400
    assert db["blogs"].count_documents({}) == 0


def test_publish_refreshes_updated_at(client, db, blog_payload):
    blog_id = create(client, blog_payload)
    db["blogs"].update_one({"_id": ObjectId(blog_id)}, {"$set": {"updatedAt": OLD_STAMP}})

    resp = client.put(f"/blog-status/{blog_id}", json={"status": "published"})
    assert resp.status_code == 200

    blog = db["blogs"].find_one({"_id": ObjectId(blog_id)})
    assert blog["status"] == "published"
    assert blog["updatedAt"] > OLD_STAMP


def test_status_rejects_unknown_value(client, db, blog_payload):
    blog_id = create(client, blog_payload)
    resp = client.put(f"/blog-status/{blog_id}", json={"status": "live"})
    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Invalid status value"}
    assert db["blogs"].find_one({"_id": ObjectId(blog_id)})["status"] == "draft"


def test_status_unknown_blog(client):
    assert client.put(f"/blog-status/{ObjectId()}", json={"status": "draft"}).status_code == 404


def test_edit_content(client, db, blog_payload):
    blog_id = create(client, blog_payload)
    db["blogs"].update_one({"_id": ObjectId(blog_id)}, {"$set": {"updatedAt": OLD_STAMP}})

    resp = client.put(f"/blogs/{blog_id}", json={"title": "Give blood, give life"})
    assert resp.status_code == 200

    blog = db["blogs"].find_one({"_id": ObjectId(blog_id)})
    assert blog["title"] == "Give blood, give life"
    assert blog["content"] == blog_payload["content"]
    assert blog["updatedAt"] > OLD_STAMP


def test_list_and_published_listing(client, db):
    db["blogs"].insert_many(
        [{"title": f"d{i}", "status": "draft"} for i in range(4)]
        + [{"title": f"p{i}", "status": "published"} for i in range(8)]
    )

    everything = client.get("/blogs").get_json()
    assert everything["total"] == 12
    assert len(everything["items"]) == 6
    assert everything["totalPages"] == 2

    drafts = client.get("/blogs?status=draft").get_json()
    assert drafts["total"] == 4

    published = client.get("/published-blogs?page=2").get_json()
    assert published["total"] == 8
    assert published["currentPage"] == 2
    assert [b["title"] for b in published["items"]] == ["p6", "p7"]


def test_published_listing_ignores_status_param(client, db):
    db["blogs"].insert_many([{"status": "draft"}, {"status": "published"}])
    body = client.get("/published-blogs?status=draft").get_json()
    assert body["total"] == 1
    assert body["items"][0]["status"] == "published"


def test_delete_then_fetch(client, blog_payload):
    blog_id = create(client, blog_payload)
    assert client.delete(f"/blogs/{blog_id}").status_code == 200
    assert client.get(f"/blogs/{blog_id}").status_code == 404
    assert client.delete(f"/blogs/{blog_id}").status_code == 404
