import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "facility_db"),
}

BILLING_URL = os.getenv("BILLING_URL", "")
STORAGE_UPLOAD_URL = os.getenv("STORAGE_UPLOAD_URL", "")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

SHIFT_MINUTES = int(os.getenv("SHIFT_MINUTES", "480"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
