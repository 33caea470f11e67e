import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "beit_halohem_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REMOTE_BACKEND_ENABLED = False
LOCAL_MIRROR_DIR = os.getenv("LOCAL_MIRROR_DIR", "instance/mirror-test")

ADMIN_EMAIL = "admin@beithalohem.org"
ADMIN_PASSWORD = "admin123"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
