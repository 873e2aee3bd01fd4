"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "hr_portal"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    frontend_origin: str = "*"

    # Resume uploads (served under /uploads)
    upload_dir: str = "uploads"
    max_resume_size_mb: int = 5
    delete_resume_after_email: bool = False
    resume_cleanup_delay_seconds: int = 10

    # Mail (Gmail works with an app password)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_use_ssl: bool = True
    mail_user: str = ""
    mail_password: str = ""
    mail_from: str = ""
    hr_email: str = "hr@gyannidhi.in"
    admin_email: str = ""

    # Jobs
    company_name: str = "GyanNidhi Innovations Pvt. Ltd."
    text_search_enabled: bool = True

    # App
    log_level: str = "INFO"
    debug: bool = False

    @property
    def cors_origins(self) -> List[str]:
        """Split FRONTEND_ORIGIN into a list for CORSMiddleware"""
        return [o.strip() for o in self.frontend_origin.split(",") if o.strip()] or ["*"]

    @property
    def mail_configured(self) -> bool:
        return bool(self.mail_user and self.mail_password)

    @property
    def sender_address(self) -> str:
        return self.mail_from or self.mail_user

    @property
    def max_resume_size_bytes(self) -> int:
        return self.max_resume_size_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
