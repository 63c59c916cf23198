from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application Settings
    PROJECT_NAME: str = "Chat Relay"
    DEBUG: bool = False

    # Server binding (PORT mirrors the conventional hosting env var)
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Comma-separated list of allowed origins; "*" opens CORS to everyone
    CORS_ORIGINS: str = "*"

    # Chat Settings
    MAX_MESSAGE_HISTORY: int = 50
    SYSTEM_USER: str = "system"

    # API Settings
    API_V1_STR: str = "/api/v1"

    LOG_LEVEL: str = "INFO"
    # Optional path for a daily-rotated log file; stdout only when unset
    LOG_FILE: str | None = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def _post_init(self):
        if self.MAX_MESSAGE_HISTORY < 1:
            raise ValueError("MAX_MESSAGE_HISTORY must be at least 1")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
settings._post_init()
