from datetime import timedelta

from flask_jwt_extended import create_access_token, create_refresh_token

from portal.config.settings import JWTConfig


def _session_claims(session_data):
    return {
        "id": session_data.get("id"),
        "email": session_data.get("email"),
        "name": session_data.get("name"),
        "institutionId": session_data.get("institutionId"),
        "institutionName": session_data.get("institutionName"),
        "portalKey": session_data.get("portalKey"),
    }


class SessionTokens:
    @staticmethod
    def generate_token(session_data, expires_delta=None):
        """Generate JWT access token carrying the user and institution claims"""
        if expires_delta is None:
            expires_delta = timedelta(minutes=JWTConfig.ACCESS_TOKEN_EXPIRES_MINUTES)

        return create_access_token(
            identity=session_data.get("email"),
            expires_delta=expires_delta,
            additional_claims=_session_claims(session_data),
            fresh=False
        )

    @staticmethod
    def generate_refresh_token(session_data):
        """Generate JWT refresh token for user"""
        expires_delta = timedelta(days=JWTConfig.REFRESH_TOKEN_EXPIRE_DAYS)

        return create_refresh_token(
            identity=session_data.get("email"),
            expires_delta=expires_delta,
            additional_claims=_session_claims(session_data)
        )
