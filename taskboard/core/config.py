from pydantic_settings import BaseSettings
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = "sqlite:///./tasks.db"
    SQL_ECHO: bool = False

    # JWT settings
    SECRET_KEY: str = "your-super-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Anti-forgery tokens handed out with every form
    CSRF_TOKEN_EXPIRE_MINUTES: int = 60

    # Project settings
    PROJECT_NAME: str = "Taskboard"
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Dashboard
    RECENT_TASKS_LIMIT: int = 5

    class Config:
        env_file = ".env"
        # Variables in .env that aren't defined here are ignored.
        extra = "ignore"

settings = Settings()
