"""Authentication API - Presentation Layer (SoC)"""
import logging

from flask_jwt_extended import decode_token, get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_restful import Resource
from jwt.exceptions import InvalidTokenError

from portal.auth.auth_middleware import blacklist_token, is_token_blacklisted
from portal.auth.jwt_utils import SessionTokens
from portal.exceptions.error_handler import handle_service_error
from portal.exceptions.exceptions import UnauthenticatedError
from portal.utils.validation.input_validator import get_json_data

logger = logging.getLogger(__name__)


def token_response(session_data):
    return {
        "success": True,
        "message": "Login successful",
        "access_token": SessionTokens.generate_token(session_data),
        "refresh_token": SessionTokens.generate_refresh_token(session_data),
        "token_type": "Bearer"
    }


class LoginResource(Resource):
    def __init__(self, services):
        self.service = services.account

    def post(self):
        try:
            data = get_json_data()
            session_data = self.service.login(data.get("email"), data.get("password"))
            return token_response(session_data), 200
        except Exception as e:
            return handle_service_error(e)


class RefreshTokenResource(Resource):
    def post(self):
        """Exchange a refresh token for a new token pair carrying the same session claims"""
        try:
            refresh_token = get_json_data().get("refresh_token")
            if not refresh_token:
                raise UnauthenticatedError("Missing refresh token in request body")
            try:
                decoded = decode_token(refresh_token)
            except (JWTExtendedException, InvalidTokenError):
                raise UnauthenticatedError("Invalid or expired refresh token. Please log in again.")

            if decoded.get("type") != "refresh":
                raise UnauthenticatedError("Invalid token type. Expected refresh token")
            if is_token_blacklisted(decoded.get("jti")):
                raise UnauthenticatedError("Refresh token has been revoked. Please log in again.")

            return token_response(decoded), 200
        except Exception as e:
            return handle_service_error(e)


class LogoutResource(Resource):
    def post(self):
        """Logout user"""
        try:
            verify_jwt_in_request()
            jti = get_jwt().get("jti")
            if jti:
                blacklist_token(jti)
        except (JWTExtendedException, InvalidTokenError):
            # Expired or invalid tokens are already unusable
            logger.debug("Logout called without a valid token")

        return {"success": True, "message": "Logout successful"}, 200
