import json
import os
import threading
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# bcrypt accepts cost factors in this range
MIN_HASH_ROUNDS = 4
MAX_HASH_ROUNDS = 31


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, str(default)).strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean value")


def _parse_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got: {raw}") from exc


def _parse_origins(raw: str) -> list[str]:
    # Support both CSV format and JSON array format
    if raw.startswith("["):
        try:
            parsed_list = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"ALLOWED_ORIGINS JSON is malformed: {exc}") from exc
        if not isinstance(parsed_list, list):
            raise ValueError("ALLOWED_ORIGINS JSON must be an array")
        origins = [
            origin.strip() for origin in parsed_list if isinstance(origin, str) and origin.strip()
        ]
    else:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]

    if not origins:
        raise ValueError("ALLOWED_ORIGINS must contain at least one origin")

    if "*" in origins:
        raise ValueError("ALLOWED_ORIGINS cannot contain '*'")

    for origin in origins:
        parsed = urlparse(origin)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(
                "ALLOWED_ORIGINS must contain valid http/https origins with host"
            )
    return origins


class Settings(BaseModel):
    app_name: str = Field(default="RBAC Admin")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    notification_duration_ms: int = Field(default=3000)
    normalize_delete_notifications: bool = Field(default=False)
    seed_demo_data: bool = Field(default=True)
    activity_log_size: int = Field(default=50)
    password_hash_rounds: int = Field(default=12)

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls.model_fields

        raw_allowed_origins = os.getenv("ALLOWED_ORIGINS", "").strip()
        if raw_allowed_origins:
            allowed_origins = _parse_origins(raw_allowed_origins)
        else:
            allowed_origins = defaults["allowed_origins"].get_default(call_default_factory=True)

        notification_duration_ms = _parse_int(
            "NOTIFICATION_DURATION_MS", defaults["notification_duration_ms"].default
        )
        if notification_duration_ms <= 0:
            raise ValueError("NOTIFICATION_DURATION_MS must be greater than 0")

        activity_log_size = _parse_int(
            "ACTIVITY_LOG_SIZE", defaults["activity_log_size"].default
        )
        if activity_log_size <= 0:
            raise ValueError("ACTIVITY_LOG_SIZE must be greater than 0")

        password_hash_rounds = _parse_int(
            "PASSWORD_HASH_ROUNDS", defaults["password_hash_rounds"].default
        )
        if not MIN_HASH_ROUNDS <= password_hash_rounds <= MAX_HASH_ROUNDS:
            raise ValueError(
                f"PASSWORD_HASH_ROUNDS must be between {MIN_HASH_ROUNDS} and {MAX_HASH_ROUNDS}"
            )

        return cls(
            app_name=os.getenv("APP_NAME", defaults["app_name"].default),
            debug=_parse_bool("DEBUG", defaults["debug"].default),
            log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default).strip().upper(),
            allowed_origins=allowed_origins,
            notification_duration_ms=notification_duration_ms,
            normalize_delete_notifications=_parse_bool(
                "NORMALIZE_DELETE_NOTIFICATIONS",
                defaults["normalize_delete_notifications"].default,
            ),
            seed_demo_data=_parse_bool("SEED_DEMO_DATA", defaults["seed_demo_data"].default),
            activity_log_size=activity_log_size,
            password_hash_rounds=password_hash_rounds,
        )


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get settings instance, creating it on first access.

    Environment validation happens on first access rather than at import time.

    Raises:
        ValueError: If an environment variable is present but invalid
    """
    global _settings_instance

    if _settings_instance is not None:
        return _settings_instance

    with _settings_lock:
        if _settings_instance is None:
            _settings_instance = Settings.from_env()

    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
