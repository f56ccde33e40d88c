"""
Interpreter settings, read from the environment and overridden by CLI flags.
"""
import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "EGG_"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class InterpreterSettings(BaseModel):
    """Runtime settings for the egg command."""
    log_level: str = Field(default="WARNING", description="Root logging level name.")
    log_file: Optional[str] = Field(default=None, description="Write logs here instead of stderr.")
    dump_ast: bool = Field(default=False, description="Print the parsed AST as JSON before running.")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got '{value}'")
        return normalized

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InterpreterSettings":
        """
        Builds settings from EGG_LOG_LEVEL, EGG_LOG_FILE and EGG_DUMP_AST.

        Args:
            environ: Mapping to read from. Defaults to os.environ.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field_name.upper())
            if raw is not None and raw != "":
                values[field_name] = raw
        logger.debug(f"Settings from environment: {values}")
        # pydantic coerces "1"/"true"/"yes" to bool for dump_ast
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "InterpreterSettings":
        """Returns a copy with every non-None override applied and re-validated."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return InterpreterSettings(**data)
