from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator


class Settings(BaseSettings):
    api_base_url: str = "https://tyxsjpt.seu.edu.cn"
    # headers.json and routes.json live here
    config_dir: str = "config"
    # One <route name>.json track file per route
    tracks_dir: str = "config/tracks"
    # Timezone for start/end times on records.
    # Examples: "Asia/Shanghai", "Europe/London", or "local" to use system tz.
    timezone: str = "local"

    # Pacing delay applied before every remote request (seconds)
    request_min_delay_sec: float = 1.5
    request_max_delay_sec: float = 3.5
    request_timeout_sec: float = 30.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("timezone", mode="before")
    @classmethod
    def _check_timezone(cls, v):
        if v in ("", None, "null", "None", "local"):
            return "local"
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v!r}") from e
        return v

    @model_validator(mode="after")
    def _check_delay_bounds(self):
        if self.request_min_delay_sec < 0:
            raise ValueError("request_min_delay_sec must be >= 0")
        if self.request_max_delay_sec < self.request_min_delay_sec:
            raise ValueError("request_max_delay_sec must be >= request_min_delay_sec")
        return self


settings = Settings()
