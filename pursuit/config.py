from pydantic_settings import BaseSettings

from pursuit.kernel.features import HOUR_MS


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Edits within this window of the latest point collapse into it
    compaction_window_ms: int = HOUR_MS

    # Reporting
    velocity_window_days: int = 30
    fill_threshold: float = 0.8  # relative progress where the fill starts turning green
    fill_behind_rgb: tuple[int, int, int] = (187, 102, 77)
    fill_ahead_rgb: tuple[int, int, int] = (136, 187, 77)

    # Defaults for newly created regular goals
    default_regular_window_days: int = 28

    model_config = {"env_file": ".env", "env_prefix": "PURSUIT_", "extra": "ignore"}


settings = Settings()
