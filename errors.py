class ApiError(Exception):
    """Error that maps straight onto a ``{success: false, message}`` response."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message}


class BadRequest(ApiError):
    status_code = 400


class NotFound(ApiError):
    status_code = 404


def json_object(request):
    """The request's JSON body as a dict, or BadRequest."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def require_fields(data, *fields):
    missing = [f for f in fields if data.get(f) in (None, "")]
    if missing:
        raise BadRequest(f"Missing required fields: {', '.join(missing)}")
