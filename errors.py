"""Error taxonomy shared by the service layer and the HTTP surface."""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException


class ServiceError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status = 500

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(ServiceError):
    """Missing or malformed input, including invalid reference ids."""

    status = 400


class NotFoundError(ServiceError):
    """A referenced record does not exist."""

    status = 404


class ConflictError(ServiceError):
    """A uniqueness constraint was violated."""

    status = 409

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} must be unique")
        self.field = field


def register_json_handlers(bp, logger) -> None:
    """Render errors raised inside ``bp`` views as ``{"message": ...}`` JSON."""

    @bp.errorhandler(ServiceError)
    def handle_service_error(err):
        return jsonify(message=err.message), err.status

    @bp.errorhandler(Exception)
    def handle_unexpected_error(err):
        if isinstance(err, HTTPException):
            return err
        logger.exception("Unhandled error in %s", request.path)
        return jsonify(message=str(err) or "Internal server error"), 500
