import os
import tempfile

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "json"
DATA_DIR = os.getenv("DATA_DIR", os.path.join(tempfile.gettempdir(), "timecard-test"))
COLLECTION_KEY = "attendance"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timecard_test"),
}

AUTO_INIT_DB = False
