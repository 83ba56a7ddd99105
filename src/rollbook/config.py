from pydantic_settings import BaseSettings

DEFAULT_TOKEN_SECRET_KEY = "dev-secret-change-me"


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including database name, e.g. mongodb://localhost:27017/rollbook
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 4000
    debug: bool = False
    token_secret_key: str = DEFAULT_TOKEN_SECRET_KEY  # Signing key for session tokens; the default is insecure
    cors_origins: list[str] = ["*"]
    # Single demo identity accepted by the login endpoint
    demo_username: str = "demo"
    demo_password: str = "password"  # noqa: S105
    demo_display_name: str = "Demo User"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "ROLLBOOK_",
        "extra": "ignore",
        "frozen": True,
    }
