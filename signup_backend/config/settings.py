from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase (credential store)
    supabase_url: str = ""
    supabase_key: str = ""
    accounts_table: str = "accounts"

    # AWS S3 (image host, reads from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None
    photo_folder: str = "user_photos"
    photo_public_base_url: Optional[str] = None  # e.g. a CDN in front of the bucket

    # Password hashing
    bcrypt_rounds: int = 10

    # App
    app_name: str = "signup-backend"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,https://numetry-signupform-frontend.vercel.app"
    host: str = "0.0.0.0"
    port: int = 5000

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
