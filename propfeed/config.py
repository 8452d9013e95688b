from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    LOG_LEVEL: str = "INFO"

    # --- RESO Web API (Bridge Data Output OData) ---
    RESO_BASE_URL: str = "https://api.bridgedataoutput.com/api/v2/OData/test"
    RESO_ACCESS_TOKEN: str | None = None
    # ListingKey addressed as Property('<key>'); can also come from request args
    RESO_LISTING_KEY: str | None = None

    # --- HTTP ---
    # single attempt, no retries
    HTTP_TIMEOUT_S: float = 9.0


settings = Settings()
