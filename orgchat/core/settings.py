from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Org Chat"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""
    database_name: str = "postgres"
    database_pool_min_size: int = 1
    database_pool_max_size: int = 10

    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"
    auth_request_timeout_seconds: float = 10.0

    state_signing_key: str = ""
    org_state_expire_seconds: int = 86400

    cookie_secure: bool = True
    access_token_cookie_max_age: int = 3600
    refresh_token_cookie_max_age: int = 604800

    backend_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:3000"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin]

    @property
    def auth_base_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/auth/v1"

    @property
    def auth_callback_url(self) -> str:
        return f"{self.backend_url.rstrip('/')}/api/auth/callback"


settings = Settings()
