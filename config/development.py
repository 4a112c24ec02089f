import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "technician_scheduler"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# mysql | memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

# Business day: a new day starts DAY_CUTOFF_MINUTES after local midnight.
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")
DAY_CUTOFF_MINUTES = int(os.getenv("DAY_CUTOFF_MINUTES", "5"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
