import os
from dataclasses import dataclass, field

from .clock import DEFAULT_TIMEZONE, normalize_timezone_name

DEFAULT_PROFILE_NAMES: tuple[str, ...] = ("Profile 1", "Profile 2")


def _parse_profile_names(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_PROFILE_NAMES
    return tuple(name.strip() for name in raw.split(",") if name.strip())


@dataclass(frozen=True)
class Config:
    log_format: str = "json"
    timezone: str = DEFAULT_TIMEZONE
    default_profiles: tuple[str, ...] = field(default=DEFAULT_PROFILE_NAMES)

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            log_format=os.environ.get("WEIGHT_PROGRESS_LOG_FORMAT", "json"),
            timezone=normalize_timezone_name(os.environ.get("WEIGHT_PROGRESS_TIMEZONE")) or DEFAULT_TIMEZONE,
            default_profiles=_parse_profile_names(os.environ.get("WEIGHT_PROGRESS_DEFAULT_PROFILES")),
        )
