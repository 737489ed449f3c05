"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_COMPONENT_NAME = "channel-messaging"
DEFAULT_DASH_TOKEN = "_$dash$_"
DEFAULT_DESTINATION = "messages"


@dataclass(frozen=True)
class TracingSettings:
    """Settings shared by the codec, the interceptor and the bootstrap."""

    component_name: str = DEFAULT_COMPONENT_NAME
    dash_token: str = DEFAULT_DASH_TOKEN  # must match on both ends of a deployment
    destination: str = DEFAULT_DESTINATION
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.dash_token or "-" in self.dash_token:
            raise ValueError(f"Invalid dash token: {self.dash_token!r}")

    @classmethod
    def from_env(cls) -> "TracingSettings":
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            component_name=os.getenv("CHANNEL_TRACING_COMPONENT", DEFAULT_COMPONENT_NAME),
            dash_token=os.getenv("CHANNEL_TRACING_DASH_TOKEN", DEFAULT_DASH_TOKEN),
            destination=os.getenv("CHANNEL_TRACING_DESTINATION", DEFAULT_DESTINATION),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
