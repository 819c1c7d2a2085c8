"""Request helpers shared by the feature controllers.

Session keys ``staff_id`` and ``role`` are written by the authentication
collaborator; this layer only reads them.
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, RemoteError, ValidationError

logger = logging.getLogger(__name__)


def current_staff_id() -> int:
    return int(session["staff_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.STAFF


def error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "staff_id" not in session:
            return error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "staff_id" not in session:
            return error("Please log in to continue", 401)
        if current_role() != Role.MANAGER:
            return error("Managers only", 403)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Map domain exceptions to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return error(str(e), 400)
        except AuthorizationError as e:
            return error(str(e), 403)
        except RemoteError as e:
            logger.warning("Backend unavailable during %s: %s", view.__name__, e)
            return error("Backend unavailable, please try again", 502)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return error("Internal error", 500)

    return wrapper
