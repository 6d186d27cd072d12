"""Sort visualizer configuration — environment-driven, no hardcoded secrets."""

import os
import secrets


class Settings:
    secret_key: str = os.getenv("SORTVIZ_SECRET_KEY") or secrets.token_hex(32)
    log_level: str = os.getenv("SORTVIZ_LOG_LEVEL", "info")
    host: str = os.getenv("SORTVIZ_HOST", "127.0.0.1")
    port: int = int(os.getenv("SORTVIZ_PORT", "5000"))

    # Playback
    default_speed: int = int(os.getenv("SORTVIZ_DEFAULT_SPEED", "50"))
    default_algorithm: str = os.getenv("SORTVIZ_DEFAULT_ALGORITHM", "bubble")

    # Arrays
    default_size: int = int(os.getenv("SORTVIZ_DEFAULT_SIZE", "50"))
    min_size: int = int(os.getenv("SORTVIZ_MIN_SIZE", "5"))
    max_size: int = int(os.getenv("SORTVIZ_MAX_SIZE", "100"))
    value_low: int = int(os.getenv("SORTVIZ_VALUE_LOW", "1"))
    value_high: int = int(os.getenv("SORTVIZ_VALUE_HIGH", "100"))
    max_custom: int = int(os.getenv("SORTVIZ_MAX_CUSTOM", "300"))


settings = Settings()
