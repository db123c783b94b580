# utils/errors.py
"""Application errors, rendered as JSON by the handlers registered in app.py."""


class ApiError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_json(self):
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"

    @classmethod
    def from_pydantic(cls, exc):
        """Collapse a pydantic ValidationError into a single readable message."""
        details = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ()))
            details.append({"field": field, "message": err.get("msg")})
        if details:
            first = details[0]
            message = f"{first['field']}: {first['message']}" if first["field"] else first["message"]
        else:
            message = cls.default_message
        return cls(message, details=details)

    @classmethod
    def from_mongoengine(cls, exc):
        """Field errors raised by a mongoengine document's validate() on save."""
        details = [{"field": field, "message": str(msg)} for field, msg in (exc.to_dict() or {}).items()]
        if details:
            message = f"{details[0]['field']}: {details[0]['message']}"
        else:
            message = str(exc.message) if exc.message else cls.default_message
        return cls(message, details=details or None)


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class ConcurrentUpdateError(ConflictError):
    default_message = "The record was modified concurrently, please retry"
