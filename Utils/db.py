import logging
from urllib.parse import urlparse

from dotenv import load_dotenv
from mongoengine import connect

load_dotenv()

logger = logging.getLogger(__name__)


def init_db(mongo_uri, mongo_client_class=None):
    # Auto-detect DB name from URI
    parsed = urlparse(mongo_uri)
    db_name = (parsed.path or "").lstrip("/") or "marketplace_db"

    kwargs = {"db": db_name, "host": mongo_uri, "alias": "default"}
    if mongo_client_class is not None:
        kwargs["mongo_client_class"] = mongo_client_class

    try:
        connection = connect(**kwargs)
        logger.info(f"✅ MongoDB connected successfully → {db_name}")
        return connection
    except Exception as e:
        logger.error(f"❌ MongoDB connection error: {e}")
        raise
