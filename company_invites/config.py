from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = "CompanyInvites"
    app_env: str = "development"

    # Supabase (service role — never expose to clients)
    supabase_url: str = Field(default="", validation_alias="PRIVATE_SUPABASE_URL")
    supabase_service_role_key: str = Field(
        default="", validation_alias="PRIVATE_SUPABASE_SERVICE_ROLE_KEY"
    )

    # Sentry (optional — only set in staging/production)
    sentry_dsn: str = ""

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def log_level(self) -> str:
        return "INFO" if self.is_production else "DEBUG"

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


settings = Settings()

# ---------------------------------------------------------------------------
# Application constants (not env-configurable — change in code)
# ---------------------------------------------------------------------------

# HTTP timeout (seconds) for Supabase auth + REST calls
HTTP_TIMEOUT = 15.0

# Frontend pages linked from the invitation email
FRONTEND_BASE_URL = "https://jaybuildsthings.github.io/BinDetectiveV1"
SET_PASSWORD_URL = f"{FRONTEND_BASE_URL}/set-password.html"
LOGIN_URL = f"{FRONTEND_BASE_URL}/login.html"
MANAGE_URL = f"{FRONTEND_BASE_URL}/manage.html"
DASHBOARD_URL = f"{FRONTEND_BASE_URL}/dashboard.html"
USERS_URL = f"{FRONTEND_BASE_URL}/users.html"

ALREADY_REGISTERED_WARNING = "User already exists. Access has been granted."
