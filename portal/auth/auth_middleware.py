from functools import wraps

from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException, NoAuthorizationError, RevokedTokenError
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from portal.auth.tenant_scope import TenantScope
from portal.exceptions.error_handler import handle_service_error
from portal.exceptions.exceptions import UnauthenticatedError

# In-memory blacklist storage
blacklisted_tokens = set()


def blacklist_token(jti):
    blacklisted_tokens.add(jti)


def is_token_blacklisted(jti):
    """Check if token is blacklisted"""
    return jti in blacklisted_tokens


def current_session_claims() -> dict:
    """Verify the request's JWT and return its claims, mapping JWT failures to UnauthenticatedError"""
    try:
        verify_jwt_in_request()
    except NoAuthorizationError:
        raise UnauthenticatedError("Authentication required. Please log in.")
    except ExpiredSignatureError:
        raise UnauthenticatedError("Session has expired. Please log in again.")
    except RevokedTokenError:
        raise UnauthenticatedError("Session has been invalidated. Please log in again.")
    except (InvalidTokenError, JWTExtendedException):
        raise UnauthenticatedError("Invalid session token. Please log in again.")

    claims = get_jwt()
    if is_token_blacklisted(claims.get("jti")):
        raise UnauthenticatedError("Session has been invalidated. Please log in again.")
    return claims


def current_scope() -> TenantScope:
    return TenantScope.from_claims(current_session_claims())


def session_required(f):
    """Decorator that resolves the TenantScope and passes it as the ``scope`` keyword"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            scope = current_scope()
        except UnauthenticatedError as e:
            return handle_service_error(e)
        return f(*args, scope=scope, **kwargs)
    return decorated_function
