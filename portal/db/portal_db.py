"""MongoDB handle - explicitly constructed and passed into the repository layer"""
import logging
import urllib.parse

from pymongo import MongoClient
from pymongo.database import Database

from portal.config.settings import COLLECTIONS, MongoConfig

logger = logging.getLogger(__name__)


def escape_mongo_uri(uri: str) -> str:
    """Escape credentials in a mongodb:// URI so special characters survive parsing"""
    parsed_uri = urllib.parse.urlparse(uri)
    if not (parsed_uri.username and parsed_uri.password):
        return uri

    escaped_username = urllib.parse.quote_plus(urllib.parse.unquote(parsed_uri.username))
    escaped_password = urllib.parse.quote_plus(urllib.parse.unquote(parsed_uri.password))
    escaped_netloc = f"{escaped_username}:{escaped_password}@{parsed_uri.hostname}"
    if parsed_uri.port:
        escaped_netloc += f":{parsed_uri.port}"

    return urllib.parse.urlunparse((
        parsed_uri.scheme,
        escaped_netloc,
        parsed_uri.path,
        parsed_uri.params,
        parsed_uri.query,
        parsed_uri.fragment
    ))


def get_mongo_client(uri: str = None) -> MongoClient:
    """Get a MongoDB client with connection pooling."""
    uri = uri or MongoConfig.URL
    if not uri:
        raise RuntimeError("Neither DB_URL environment variable nor local_config.json found")
    return MongoClient(escape_mongo_uri(uri), **MongoConfig.CLIENT_OPTIONS)


class PortalDatabase:
    """Wraps a pymongo Database and exposes the portal collections by name"""

    def __init__(self, database: Database):
        self.database = database
        self.users = database[COLLECTIONS["users"]]
        self.institutions = database[COLLECTIONS["institutions"]]
        self.members = database[COLLECTIONS["members"]]
        self.contents = database[COLLECTIONS["contents"]]
        self.performances = database[COLLECTIONS["performances"]]
        self.interactions = database[COLLECTIONS["interactions"]]

    @classmethod
    def from_settings(cls, uri: str = None, db_name: str = None) -> "PortalDatabase":
        client = get_mongo_client(uri)
        db_name = db_name or MongoConfig.DB_NAME
        logger.info(f"Connected MongoDB client for database '{db_name}'")
        return cls(client[db_name])
