"""Configuration for the regrep command line front end."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

LOG_ENV_VAR = "REGREP_LOG"


@dataclass
class Config:
    """Settings for rendering matches and logging.

    Attributes:
        highlight: Wrap the matched span in terminal escapes.
        bold: Escape sequence written before the match.
        regular: Escape sequence written after the match.
        strip_newline: Drop the line terminator from the input line.
        log_level: Logging level name for the CLI.
    """

    highlight: bool = True
    bold: str = "\x1b[1m"
    regular: str = "\x1b[22m"
    strip_newline: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Create configuration from environment variables.

        ``REGREP_LOG`` sets the log level (e.g. ``debug``).
        """
        if environ is None:
            environ = os.environ
        level = environ.get(LOG_ENV_VAR)
        if level:
            return cls(log_level=level)
        return cls.default()

    def render(self, line: str, start: int, end: int) -> str:
        """Render ``line`` with ``line[start:end]`` marked as the match."""
        if not self.highlight:
            return line
        return f"{line[:start]}{self.bold}{line[start:end]}{self.regular}{line[end:]}"
