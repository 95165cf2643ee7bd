# quickchat/core/config.py

import os
from dotenv import load_dotenv

# Load .env once here so all modules see env vars
load_dotenv()

# =========================
# DATABASE
# =========================

DB_USER = os.getenv("DB_USER", "quickchat")
DB_PASS = os.getenv("DB_PASS", "quickchat")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "quickchat")

# DATABASE_URL wins over the individual DB_* settings
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# =========================
# AUTH
# =========================

JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
TOKEN_EXPIRE_DAYS = int(os.getenv("TOKEN_EXPIRE_DAYS", "7"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "1") == "1"

# =========================
# ASSET STORE (profile pictures, image messages)
# =========================

ASSET_UPLOAD_URL = os.getenv("ASSET_UPLOAD_URL", "")
ASSET_UPLOAD_PRESET = os.getenv("ASSET_UPLOAD_PRESET", "quickchat")
ASSET_UPLOAD_TIMEOUT = float(os.getenv("ASSET_UPLOAD_TIMEOUT", "30"))

# =========================
# HTTP
# =========================

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
