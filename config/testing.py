from .config import db_config

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

LEGACY_CHECKIN_ENABLED = True
