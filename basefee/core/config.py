# /basefee/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Operational Settings
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None

    # Trend classification thresholds (ratios against the long-window median)
    TREND_FALLING_THRESHOLD: float = 0.725
    TREND_RAISING_THRESHOLD: float = 1.275
    TREND_SURGING_THRESHOLD: float = 1.5
    TREND_MEDIAN_SLOPE_THRESHOLD: float = -5

    # Trend windows: entries dropped from the head of the history, then group size
    TREND_SHORT_WINDOW_OFFSET: int = 51
    TREND_SHORT_GROUP_SIZE: int = 5
    TREND_LONG_WINDOW_OFFSET: int = 1
    TREND_LONG_GROUP_SIZE: int = 25

    # Rewards above this many gwei are treated as outlier blocks
    OUTLIER_REWARD_CEILING_GWEI: float = 5
    REWARD_PERCENTILE_INDEX: int = 0

    # Base fee suggestion
    SUGGESTION_SAMPLE_MIN: float = 0.1
    SUGGESTION_SAMPLE_MAX: float = 0.3
    SUGGESTION_TIME_FACTOR: float = 15
    SUGGESTION_MAX_TIME_FACTOR: int = 15

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


try:
    settings = Settings()
except Exception as e:
    # Late import to avoid circular dependency only for logging the failure
    try:
        from basefee.core.logger import get_logger
        log = get_logger("basefee.config")
        log.critical("FAILED_TO_LOAD_SETTINGS", error=str(e))
    except Exception:
        print("FAILED_TO_LOAD_SETTINGS", e)
    raise SystemExit(1)
