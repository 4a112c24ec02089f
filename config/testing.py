import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "technician_scheduler_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

TIMEZONE = "Asia/Jakarta"
DAY_CUTOFF_MINUTES = 5

AUTO_INIT_DB = False
AUTO_SEED_DB = False
