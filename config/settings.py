"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = ""                 # HMAC secret for auth tokens (JWT_SECRET), required
    jwt_expiry_seconds: int = 604800     # 7 days
    bcrypt_rounds: int = 8               # moderate cost: bounds CPU per login under load

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
