"""Password hashing with bcrypt"""
import bcrypt

from portal.config.settings import SecurityConfig


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=SecurityConfig.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash; malformed hashes never match"""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False
