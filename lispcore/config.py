from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

# Defaults
_DEFAULT_HOST = "127.0.0.1"
_DEFAULT_PORT = 8765
_DEFAULT_REAPER_INTERVAL = 30.0
_DEFAULT_LOG_LEVEL = "WARNING"


def value_from_env(var: str, parse: Callable[[str], T], default: Optional[T]) -> Optional[T]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {var}: {raw!r}") from None


def get_idle_timeout() -> Optional[float]:
    # 0 disables idle eviction
    timeout = value_from_env('LISPCORE_SESSION_IDLE_TIMEOUT', float, None)
    return timeout if timeout else None


def get_max_sessions() -> Optional[int]:
    limit = value_from_env('LISPCORE_MAX_SESSIONS', int, None)
    return limit if limit else None


def get_reaper_interval() -> float:
    return value_from_env('LISPCORE_REAPER_INTERVAL', float, _DEFAULT_REAPER_INTERVAL)


def get_server_address() -> tuple[str, int]:
    host = value_from_env('LISPCORE_HOST', str, _DEFAULT_HOST)
    port = value_from_env('LISPCORE_PORT', int, _DEFAULT_PORT)
    return host, port


def get_log_level() -> str:
    return value_from_env('LISPCORE_LOG_LEVEL', str.upper, _DEFAULT_LOG_LEVEL)


@dataclass(frozen=True)
class Settings:
    idle_timeout: Optional[float] = None
    max_sessions: Optional[int] = None
    reaper_interval: float = _DEFAULT_REAPER_INTERVAL
    host: str = _DEFAULT_HOST
    port: int = _DEFAULT_PORT
    log_level: str = _DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        host, port = get_server_address()
        return cls(
            idle_timeout=get_idle_timeout(),
            max_sessions=get_max_sessions(),
            reaper_interval=get_reaper_interval(),
            host=host,
            port=port,
            log_level=get_log_level(),
        )
