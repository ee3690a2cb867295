from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tiger.db"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ENV: str = "local"  # Environment setting
    LOG_LEVEL: str = "INFO"

    # Recurrence
    RECURRENCE_MAX_OCCURRENCES: int = 10
    # Product decision pending: keep or drop already generated
    # occurrences when a parent stops recurring.
    DELETE_OCCURRENCES_WHEN_RECURRENCE_DISABLED: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
