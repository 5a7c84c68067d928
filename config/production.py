import os

from .config import Config, db_config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

LEGACY_CHECKIN_ENABLED = env_flag("LEGACY_CHECKIN_ENABLED", "0")
