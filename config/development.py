import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "facility_db"),
}

# Billing collaborator (flat payment status) and photo storage
BILLING_URL = os.getenv("BILLING_URL", "http://localhost:8081")
STORAGE_UPLOAD_URL = os.getenv("STORAGE_UPLOAD_URL", "")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Length of a standard shift, for the attendance progress ring
SHIFT_MINUTES = int(os.getenv("SHIFT_MINUTES", "480"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
