from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "ticketing-backend"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite+pysqlite:///./ticketing.db"

    JWT_SECRET: str = "change_me_jwt"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = ""
    JWT_TTL_MINUTES: int = 240

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:4200"

    # Query defaults of the entity list endpoints.
    DEFAULT_PAGE_NUMBER: int = 1
    DEFAULT_PAGE_SIZE: int = 10

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
