"""Shared constants and configuration defaults."""

VERSION = "0.3.0"

SERVICE_NAME = "speedrun-board"

DEFAULT_API_URL = "https://www.speedrun.com/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = f"{SERVICE_NAME}/{VERSION}"

API_URL_ENV = "SPEEDRUN_API_URL"
TIMEOUT_ENV = "SPEEDRUN_API_TIMEOUT"
USER_AGENT_ENV = "SPEEDRUN_USER_AGENT"

MAX_CONCURRENT_LOOKUPS = 4
