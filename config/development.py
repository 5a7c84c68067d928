from .config import Config, db_config, env_flag

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = db_config()

DEBUG = True
LOG_LEVEL = "DEBUG"

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo data on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

# Old in-memory toggle endpoint, kept for demo clients only.
LEGACY_CHECKIN_ENABLED = env_flag("LEGACY_CHECKIN_ENABLED", "1")
