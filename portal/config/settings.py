"""Configuration settings - Configuration Layer (Environment Separated)"""
import json
import os
from pathlib import Path
from typing import Dict, Set

from dotenv import load_dotenv

load_dotenv()


def safe_int_env(key: str, default: str) -> int:
    """Safely convert environment variable to int"""
    try:
        return int(os.getenv(key, default))
    except ValueError:
        return int(default)


def safe_float_env(key: str, default: str) -> float:
    """Safely convert environment variable to float"""
    try:
        return float(os.getenv(key, default))
    except ValueError:
        return float(default)


def _local_config_url() -> str:
    """Fallback to local_config.json when DB_URL is not set"""
    config_path = Path(os.getenv("PORTAL_LOCAL_CONFIG", "local_config.json"))
    if not config_path.exists():
        return ""
    with open(config_path, "r") as config_file:
        config_data = json.load(config_file)
    return config_data.get("MONGO_CONFIG", {}).get("url", "")


# Database Configuration
class MongoConfig:
    URL = os.getenv("DB_URL") or _local_config_url()
    DB_NAME = os.getenv("DB_NAME", "lumo_portal")
    CLIENT_OPTIONS = {
        "maxPoolSize": safe_int_env("MONGO_MAX_POOL_SIZE", "50"),
        "minPoolSize": safe_int_env("MONGO_MIN_POOL_SIZE", "5"),
        "connectTimeoutMS": 10000,
        "serverSelectionTimeoutMS": 10000,
        "socketTimeoutMS": 60000,
        "retryWrites": True,
        "retryReads": True,
    }


# Collection names as stored in MongoDB
COLLECTIONS: Dict[str, str] = {
    "users": "users",
    "institutions": "institutions",
    "members": "institutionmembers",
    "contents": "contents",
    "performances": "performances",
    "interactions": "interactions",
}


# JWT Configuration
class JWTConfig:
    SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
    ACCESS_TOKEN_EXPIRES_MINUTES = safe_int_env("JWT_ACCESS_TOKEN_EXPIRES", "60")
    REFRESH_TOKEN_EXPIRE_DAYS = safe_int_env("JWT_REFRESH_TOKEN_EXPIRE_DAYS", "7")


# Logging Configuration
class LogConfig:
    LOG_DIR = os.getenv("PORTAL_LOG_DIR", "logs")
    LOG_FILE = "portal.log"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    MAX_LOG_SIZE = safe_int_env("LOG_MAX_BYTES", str(10 * 1024 * 1024))
    BACKUP_COUNT = safe_int_env("LOG_BACKUP_COUNT", "5")


# Membership (Business Configuration)
MEMBER_STATUS_PENDING = "pending"
MEMBER_STATUS_ACTIVE = "active"
MEMBER_STATUS_REVOKED = "revoked"
ALLOWED_STATUS_UPDATES: Set[str] = {MEMBER_STATUS_ACTIVE, MEMBER_STATUS_REVOKED}

# Performance levels
UNDERSTANDING_LEVEL_MASTERED = "mastered"

# User segmentation thresholds (inclusive lower bounds)
HIGH_PERFORMER_MIN_SCORE = safe_float_env("HIGH_PERFORMER_MIN_SCORE", "85")
AVERAGE_PROGRESS_MIN_SCORE = safe_float_env("AVERAGE_PROGRESS_MIN_SCORE", "60")

SEGMENT_HIGH_PERFORMERS = "High Performers"
SEGMENT_AVERAGE_PROGRESS = "Average Progress"
SEGMENT_STRUGGLING = "Struggling Users"
SEGMENT_INACTIVE = "Inactive Users"

# Activity feeds
DEFAULT_ACTIVITY_LIMIT = 5
MAX_ACTIVITY_LIMIT = safe_int_env("MAX_ACTIVITY_LIMIT", "50")
USER_TIMELINE_LIMIT = 10

# Time windows (days)
ACTIVE_LEARNER_WINDOW_DAYS = safe_int_env("ACTIVE_LEARNER_WINDOW_DAYS", "30")
DASHBOARD_CHANGE_WINDOW_DAYS = safe_int_env("DASHBOARD_CHANGE_WINDOW_DAYS", "30")

# Content defaults (mirrors the stored Content document defaults)
MAX_CONTENT_TITLE_LENGTH = 200
DEFAULT_CONTENT_DATA = (
    '{"ROOT":{"type":{"resolvedName":"renderCanvas"},"isCanvas":true,'
    '"props":{"gap":8,"padding":16},"displayName":"Canvas","custom":{},'
    '"hidden":false,"nodes":[],"linkedNodes":{}}}'
)
DELETED_CONTENT_TITLE = "Deleted Content"

# Institution branding defaults
DEFAULT_PRIMARY_COLOR = "#2563eb"
DEFAULT_SECONDARY_COLOR = "#1e40af"
MIN_INSTITUTION_NAME_LENGTH = 3

# Security Configuration
class SecurityConfig:
    MIN_PASSWORD_LENGTH = safe_int_env("MIN_PASSWORD_LENGTH", "8")
    BCRYPT_ROUNDS = safe_int_env("BCRYPT_ROUNDS", "12")


# Display fallback for absent optional profile fields
NOT_AVAILABLE = "N/A"

# Report export
ALLOWED_REPORT_FORMATS: Set[str] = {"xlsx", "pdf"}
REPORT_TITLE = "User Performance Report"
REPORT_CREATOR = "Lumo Admin Portal"
