import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "beit_halohem"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Off by default: the club runs on the local mirror until a MySQL server is set up
REMOTE_BACKEND_ENABLED = bool(int(os.getenv("REMOTE_BACKEND_ENABLED", "0")))
LOCAL_MIRROR_DIR = os.getenv("LOCAL_MIRROR_DIR", "instance/mirror")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@beithalohem.org")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create the admin account in MySQL on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
