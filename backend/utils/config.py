"""Configuration from environment."""
import os


def _flag(name: str, default: str) -> bool:
    """Read a boolean env var ("true"/"1"/"yes" are true)."""
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


PORT = int(os.environ.get("PORT", "8001"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

TESTING = os.environ.get("TESTING") == "true"

# When TESTING=true, use test DB URL so tests never touch production.
if TESTING:
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./chargehub.db",
    )

# Tokens and password hashing
JWT_SECRET = os.environ.get("JWT_SECRET", "change-me-please-use-a-long-random-secret")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
PASSWORD_RESET_EXPIRE_MINUTES = float(os.environ.get("PASSWORD_RESET_EXPIRE_MINUTES", "15"))
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "4" if TESTING else "12"))
MIN_PASSWORD_LENGTH = 6

# Sign-up as admin is only accepted for emails containing this marker.
ADMIN_EMAIL_MARKER = os.environ.get("ADMIN_EMAIL_MARKER", "@admin.")

CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]

RUN_MIGRATIONS_ON_STARTUP = _flag("RUN_MIGRATIONS_ON_STARTUP", "false" if TESTING else "true")
SEED_DEMO_STATIONS = _flag("SEED_DEMO_STATIONS", "false" if TESTING else "true")

# Password reset mail. When SMTP_HOST is empty the reset link is only logged.
SMTP_HOST = os.environ.get("SMTP_HOST", "")
SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
SMTP_EMAIL = os.environ.get("SMTP_EMAIL", "")
SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD", "")
FRONTEND_BASE_URL = os.environ.get("FRONTEND_BASE_URL", "http://localhost:5173")
