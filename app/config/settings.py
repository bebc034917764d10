from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key; used to verify user tokens
    supabase_service_role_key: Optional[str] = None  # Required for writes that bypass RLS

    # Cloudflare R2 (S3 compatible)
    cloudflare_account_id: Optional[str] = None
    r2_access_key_id: Optional[str] = None
    r2_secret_access_key: Optional[str] = None
    r2_bucket_name: Optional[str] = None
    r2_endpoint_url: Optional[str] = None  # overrides the account-derived endpoint
    r2_region: str = "auto"

    # Uploads
    max_upload_bytes: int = 5 * 1024 * 1024
    upload_key_prefix: str = "profiles"
    max_photos_per_user: int = 6

    # Mobile client
    api_url: str = "http://localhost:5000"
    profile_cache_path: str = ".linkup/user_profile.json"

    # App
    app_name: str = "linkup-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    port: int = 5000
    api_prefix: str = ""
    cors_origins: str = "*"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def r2_endpoint(self) -> str:
        if self.r2_endpoint_url:
            return self.r2_endpoint_url
        return f"https://{self.cloudflare_account_id}.r2.cloudflarestorage.com"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
