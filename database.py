import atexit
import logging
from datetime import datetime, timezone

import certifi
from bson.errors import InvalidId
from bson.objectid import ObjectId
from flask import current_app
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from errors import BadRequest

logger = logging.getLogger(__name__)

USERS = "users"
DONATION_REQUESTS = "donationRequests"
BLOGS = "blogs"


def connect(uri):
    """Build the process-wide MongoClient for ``uri``."""
    options = {"server_api": ServerApi("1", strict=True, deprecation_errors=True)}
    if uri.startswith("mongodb+srv://"):
        options.update(tls=True, tlsCAFile=certifi.where())
    client = MongoClient(uri, serverSelectionTimeoutMS=10000, tz_aware=True, **options)
    atexit.register(client.close)
    return client


def init_db(app, db=None):
    """Attach a database handle to ``app``; builds a client unless one is injected."""
    if db is None:
        client = connect(app.config["MONGO_URI"])
        app.extensions["mongo_client"] = client
        db = client[app.config["DB_NAME"]]
        logger.info("MongoDB client created for database %s", app.config["DB_NAME"])
    app.extensions["mongo_db"] = db
    ensure_indexes(db)
    return db


def ensure_indexes(db):
    # email is the natural key for users
    try:
        db[USERS].create_index("email", unique=True)
    except PyMongoError as e:
        logger.error("Could not create users.email index: %s", e)


def get_db():
    return current_app.extensions["mongo_db"]


def ping(client):
    # Send a ping to confirm a successful connection
    client.admin.command("ping")


def to_object_id(value):
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise BadRequest("Invalid id")


def now():
    return datetime.now(timezone.utc)


def serialize(doc):
    """Make a Mongo document JSON friendly: ObjectId -> str, datetime -> ISO 8601."""
    if doc is None:
        return None
    return {key: _plain(value) for key, value in doc.items()}


def _plain(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
