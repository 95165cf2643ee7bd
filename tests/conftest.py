"""
Test environment: in-memory SQLite, fast bcrypt, no rate limiting.
Set before any quickchat module reads its config.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["ASSET_UPLOAD_URL"] = "http://assets.test/upload"
os.environ["LOG_LEVEL"] = "WARNING"
