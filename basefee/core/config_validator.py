# /basefee/core/config_validator.py
# Run at startup to validate the estimator tunables before any fee is computed.
from basefee.core.config import settings
from basefee.core.logger import log


def validate():
    log.info("--- CONFIG VALIDATION START ---")
    errors = []

    if not (settings.TREND_FALLING_THRESHOLD < settings.TREND_RAISING_THRESHOLD < settings.TREND_SURGING_THRESHOLD):
        errors.append(
            "Trend thresholds must satisfy FALLING < RAISING < SURGING "
            f"(got {settings.TREND_FALLING_THRESHOLD}, {settings.TREND_RAISING_THRESHOLD}, "
            f"{settings.TREND_SURGING_THRESHOLD})"
        )
    if not (0 <= settings.SUGGESTION_SAMPLE_MIN < settings.SUGGESTION_SAMPLE_MAX <= 1):
        errors.append(
            "Sampling window must satisfy 0 <= SAMPLE_MIN < SAMPLE_MAX <= 1 "
            f"(got {settings.SUGGESTION_SAMPLE_MIN}, {settings.SUGGESTION_SAMPLE_MAX})"
        )
    for var in ("TREND_SHORT_GROUP_SIZE", "TREND_LONG_GROUP_SIZE"):
        if getattr(settings, var) < 1:
            errors.append(f"{var} must be at least 1")
    for var in ("TREND_SHORT_WINDOW_OFFSET", "TREND_LONG_WINDOW_OFFSET", "REWARD_PERCENTILE_INDEX",
                "SUGGESTION_TIME_FACTOR", "SUGGESTION_MAX_TIME_FACTOR"):
        if getattr(settings, var) < 0:
            errors.append(f"{var} must not be negative")

    if errors:
        for error in errors:
            log.critical(error)
        raise ValueError("Estimator configuration is invalid. Halting.")

    log.info("--- CONFIG VALIDATION PASSED ---")


if __name__ == "__main__":
    validate()
