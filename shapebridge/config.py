"""Configuration loaded from the environment."""

__version__ = "0.1.0"

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from shapebridge.errors import ConfigError

DEFAULT_SHAPES_API_BASE_URL = "https://api.shapes.inc/v1"
SHAPES_MODEL_NAMESPACE = "shapesinc"
DEFAULT_CHANNELS_FILE = "active_channels.json"
DEFAULT_REQUEST_TIMEOUT = 60.0
DEFAULT_IMAGE_PROBE_TIMEOUT = 5.0
DEFAULT_COMMAND_PREFIX = "/"

REQUIRED_VARS = ("DISCORD_TOKEN", "SHAPES_API_KEY", "SHAPE_USERNAME")


def _read_seconds(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass
class BridgeConfig:
    """Typed settings for one bridge process."""

    discord_token: str
    shapes_api_key: str
    shape_username: str
    shapes_api_base_url: str = DEFAULT_SHAPES_API_BASE_URL
    channels_file: str = DEFAULT_CHANNELS_FILE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    image_probe_timeout: float = DEFAULT_IMAGE_PROBE_TIMEOUT
    command_prefix: str = DEFAULT_COMMAND_PREFIX

    @property
    def model_name(self) -> str:
        return f"{SHAPES_MODEL_NAMESPACE}/{self.shape_username}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BridgeConfig":
        """Create BridgeConfig from environment variables.

        Raises ConfigError naming every missing required variable.
        """
        env = os.environ if environ is None else environ
        missing = [name for name in REQUIRED_VARS if not env.get(name, "").strip()]
        if missing:
            raise ConfigError(
                f"Please ensure that {', '.join(missing)} "
                f"{'is' if len(missing) == 1 else 'are'} set in your environment or .env file."
            )
        return cls(
            discord_token=env["DISCORD_TOKEN"].strip(),
            shapes_api_key=env["SHAPES_API_KEY"].strip(),
            shape_username=env["SHAPE_USERNAME"].strip(),
            shapes_api_base_url=(
                env.get("SHAPES_API_BASE_URL", "").strip() or DEFAULT_SHAPES_API_BASE_URL
            ).rstrip("/"),
            channels_file=env.get("ACTIVE_CHANNELS_FILE", "").strip() or DEFAULT_CHANNELS_FILE,
            request_timeout=_read_seconds(env, "SHAPES_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            image_probe_timeout=_read_seconds(env, "IMAGE_PROBE_TIMEOUT", DEFAULT_IMAGE_PROBE_TIMEOUT),
            command_prefix=env.get("COMMAND_PREFIX", "").strip() or DEFAULT_COMMAND_PREFIX,
        )
