"""Error responses - {"error", "message"} bodies for HTTP and domain errors."""

import json
import logging

import falcon
import falcon.asgi

from rolegate.domain.exceptions import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def serialize_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, exception: falcon.HTTPError
) -> None:
    """Serialize falcon.HTTPError raised by hooks and the framework."""
    resp.content_type = falcon.MEDIA_JSON
    resp.text = json.dumps(
        {
            "error": exception.title,
            "message": exception.description or exception.title,
        }
    )


async def handle_not_found(req, resp, ex: NotFoundError, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": "Not Found", "message": str(ex)}


async def handle_validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": "Validation Error", "message": str(ex)}


async def handle_conflict(req, resp, ex: ConflictError, params) -> None:
    logger.warning("Conflict on %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_409
    resp.media = {"error": "Conflict", "message": str(ex)}


async def handle_store_error(req, resp, ex: StoreError, params) -> None:
    logger.error("Store error on %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Store Error", "message": "The data store could not complete the request"}


async def log_exception(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error", "message": "Unexpected error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install the error serializer and domain exception handlers on app."""
    app.set_error_serializer(serialize_error)
    app.add_error_handler(Exception, log_exception)
    app.add_error_handler(StoreError, handle_store_error)
    app.add_error_handler(ConflictError, handle_conflict)
    app.add_error_handler(ValidationError, handle_validation_error)
    app.add_error_handler(NotFoundError, handle_not_found)
