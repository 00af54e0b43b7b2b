# Overview: Request decorators for API routes; converts failures into JSON envelopes.

from functools import wraps
from flask import current_app, jsonify

from .extensions import db
from .services.resource_service import DeleteRestrictedError, RecordNotFoundError
from .validation import ValidationError


def json_errors(f):
    """
    Convert every failure of a route into the JSON failure envelope.

    - ValidationError       -> 422 {success, message, errors}
    - RecordNotFoundError   -> 404 {success, message}
    - DeleteRestrictedError -> 409 {success, message, dependents}
    - anything else         -> 500 {success, message}, logged with traceback

    The session is rolled back on every failure so no partial write survives.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValidationError as e:
            db.session.rollback()
            return jsonify({
                "success": False,
                "message": e.message,
                "errors": e.errors,
            }), 422
        except RecordNotFoundError as e:
            db.session.rollback()
            return jsonify({"success": False, "message": str(e)}), 404
        except DeleteRestrictedError as e:
            db.session.rollback()
            return jsonify({
                "success": False,
                "message": str(e),
                "dependents": e.dependents,
            }), 409
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Unhandled error in %s", f.__name__)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return decorated_function
