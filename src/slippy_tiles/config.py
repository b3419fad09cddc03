"""
Environment driven settings for the command line tool.

Values come from the process environment, which ``load_dotenv()`` fills
from a ``.env`` file at CLI start.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError
from .metatiles import valid_scale
from .paths import PathScheme

ENV_PREFIX = "SLIPPY_TILES_"


@dataclass(frozen=True)
class Settings:
    """Defaults for path encoding, metatile size and log verbosity."""
    ext: str = "png"
    scheme: PathScheme = PathScheme.ZXY
    metatile_scale: int = 8
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Read ``SLIPPY_TILES_*`` variables.

        Raises:
            ConfigError: If a variable is set to an unusable value
        """
        environ = os.environ if environ is None else environ
        defaults = cls()

        ext = environ.get(f"{ENV_PREFIX}EXT", defaults.ext).lstrip(".")
        if not ext:
            raise ConfigError(f"{ENV_PREFIX}EXT must not be empty")

        scheme_name = environ.get(f"{ENV_PREFIX}SCHEME", defaults.scheme.value)
        try:
            scheme = PathScheme(scheme_name.lower())
        except ValueError:
            raise ConfigError(
                f"{ENV_PREFIX}SCHEME must be one of {[s.value for s in PathScheme]}",
                scheme_name,
            ) from None

        scale_text = environ.get(f"{ENV_PREFIX}METATILE_SCALE", str(defaults.metatile_scale))
        try:
            scale = int(scale_text)
        except ValueError:
            raise ConfigError(f"{ENV_PREFIX}METATILE_SCALE must be an integer", scale_text) from None
        if not valid_scale(scale):
            raise ConfigError(f"{ENV_PREFIX}METATILE_SCALE must be a power of two", scale)

        log_level = environ.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level", log_level)

        return cls(ext=ext, scheme=scheme, metatile_scale=scale, log_level=log_level)
