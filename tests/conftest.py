"""
Point the application at a throwaway SQLite database before it is imported.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="smartpark-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'smartpark.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["LOG_LEVEL"] = "WARNING"
