'''
Holds all the configurations
'''
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings

from .exceptions import DatabaseNotConfiguredError

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "SchoolFinance Backend"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Finance reconciliation and analytics for the school dashboard."
    TEST_MODE: bool = False
    LOG_LEVEL: str = "INFO"

    # Database URL
    DATABASE_URL_PROD: Optional[str] = None
    DATABASE_URL_TEST: Optional[str] = None
    @property
    def database_url(self) -> str:
        """
        Dynamically returns the correct database URL based on the test_mode flag.
        """
        url = self.DATABASE_URL_TEST if self.TEST_MODE else self.DATABASE_URL_PROD
        if not url:
            mode = "TEST" if self.TEST_MODE else "PROD"
            raise DatabaseNotConfiguredError(f"DATABASE_URL_{mode} is not set.")
        return url

    @property
    def database_configured(self) -> bool:
        if self.TEST_MODE:
            return bool(self.DATABASE_URL_TEST)
        return bool(self.DATABASE_URL_PROD)

    # Dashboard settings
    TOP_STUDENTS_LIMIT: int = Field(default=5, gt=0)

    # Other settings
    BACKEND_CORS_ORIGINS: list[str] = []

    class Config:
        env_file = ".env" # automatically loads the .env
        extra = "ignore"

# Create a single, importable instance of the settings
settings = Settings()
