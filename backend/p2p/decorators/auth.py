from functools import wraps
from flask import g
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from p2p.errors import SessionExpired


def current_staff_code():
    """Staff code carried by the request's token, or None when no token was sent."""
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    return str(identity) if identity else None


def require_staff_session(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        staff_code = current_staff_code()
        if not staff_code:
            raise SessionExpired()
        g.staff_code = staff_code
        return fn(*args, **kwargs)
    return wrapper
