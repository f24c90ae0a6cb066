"""Test settings: in-memory SQLite and cheap bcrypt rounds, applied before quizdeck is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SESSION_EXPIRE_MINUTES"] = "10"
os.environ["SESSION_STRICT_CHECK"] = "true"
