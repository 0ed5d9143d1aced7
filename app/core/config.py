from decimal import Decimal
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    APP_ENV: str = "production"
    LOG_LEVEL: str = "INFO"
    SETTLEMENT_EPSILON: Decimal = Field(Decimal("0.01"), ge=0)
    CORS_ORIGINS: list[str] = ["*"]
    DB_CONNECT_RETRIES: int = 5
    DB_RETRY_DELAY: float = 2.0

    class Config:
        env_file = ".env"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

settings = Settings()
