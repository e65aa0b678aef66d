import logging

from flask import Flask, jsonify
from flask_cors import CORS
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

import blogs
import donation_requests
import users
from config import Config
from database import init_db, ping
from errors import ApiError

logger = logging.getLogger(__name__)


def create_app(config_object=None, db=None):
    """Build the Flask app.

    ``db`` is an already-open database handle; when omitted a MongoClient is
    created from the configuration and shared by every request.
    """
    # =======================
    # Flask App Setup
    # =======================
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_object is not None:
        app.config.from_object(config_object)

    CORS(app, origins=app.config["CORS_ORIGINS"])

    # =======================
    # MongoDB Setup
    # =======================
    init_db(app, db)

    # =======================
    # Routes
    # =======================
    app.register_blueprint(users.bp)
    app.register_blueprint(donation_requests.bp)
    app.register_blueprint(blogs.bp)

    @app.route("/")
    def index():
        return "BloodLink server is running"

    register_error_handlers(app)
    return app


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(PyMongoError)
    def storage_error(error):
        logger.exception("Database error: %s", error)
        return jsonify({"success": False, "message": "Server error"}), 500

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({"success": False, "message": error.description}), error.code


# =======================
# Run App
# =======================
if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    try:
        ping(app.extensions["mongo_client"])
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")
    except PyMongoError as e:
        logger.error("MongoDB connection error: %s", e)
    logger.info("BloodLink server is running on port: %s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"])
