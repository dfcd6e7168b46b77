"""
Error handlers for the site.

Unknown routes answer 404 in the format the client accepts. Content failures
answer 500: upstream failures with a generic message, a missing ordering
document with a message naming it.
"""

import logging

from quart import Response, jsonify, render_template, request

from folio_site.content.exceptions import ContentGatewayError, MissingOrderingError

logger = logging.getLogger("quart.app")


def _accepts_html() -> bool:
    # No Accept header means the client takes anything, HTML first.
    accept = request.accept_mimetypes
    return not accept or accept.accept_html


def _accepts_json() -> bool:
    return request.accept_mimetypes.accept_json


async def _error_response(status: int, message: str):
    if _accepts_html():
        body = await render_template("errors/error.html", status=status, message=message)
        return body, status
    if _accepts_json():
        return jsonify({"error": message}), status
    return Response(message, status=status, mimetype="text/plain")


def register_error_handlers(app):
    @app.errorhandler(404)
    async def not_found(error):
        """Redirects browsers home; JSON and plain clients get a short body."""
        if _accepts_html():
            body = await render_template("errors/not_found.html", location="/")
            return body, 404
        if _accepts_json():
            return jsonify({"error": "Not Found"}), 404
        return Response("Not Found", status=404, mimetype="text/plain")

    @app.errorhandler(ContentGatewayError)
    async def content_unavailable(error):
        logger.error(f"Content API request failed for {request.path}: {error}")
        return await _error_response(500, "Internal Server Error")

    @app.errorhandler(MissingOrderingError)
    async def ordering_missing(error):
        logger.error(f"Cannot render {request.path}: {error}")
        return await _error_response(500, str(error))
