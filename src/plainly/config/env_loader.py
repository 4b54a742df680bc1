"""Environment variable configuration loading.

Reads PLAINLY_* variables and coerces them through the settings schema.
"""

import os
from typing import Annotated, Any

from pydantic import TypeAdapter, ValidationError

from .schema import FIELD_ORDER, PlainlySettings


def _field_adapter(field: str) -> TypeAdapter[Any]:
    info = PlainlySettings.model_fields[field]
    if info.metadata:
        return TypeAdapter(Annotated[info.annotation, *info.metadata])
    return TypeAdapter(info.annotation)


class EnvironmentConfigLoader:
    """Loads configuration from PLAINLY_* environment variables."""

    def env_var_names(self) -> dict[str, str]:
        return {f"PLAINLY_{field.upper()}": field for field in FIELD_ORDER}

    def load_env_config(self) -> dict[str, Any]:
        """Return only the fields actually set in the environment, coerced.

        Cross-field rules (a key must accompany use_real_api) are checked once
        all sources are merged, so each variable is validated on its own here.

        Raises:
            ValueError: If environment variables contain invalid values.
        """
        result: dict[str, Any] = {}
        for env_var, field in self.env_var_names().items():
            if env_var not in os.environ:
                continue
            raw = os.environ[env_var]
            try:
                result[field] = _field_adapter(field).validate_python(raw)
            except ValidationError as e:
                raise ValueError(
                    f"Invalid environment variable value {env_var}={raw!r}: {e}"
                ) from e
        return result

    def get_env_summary(self) -> dict[str, str]:
        """Current PLAINLY_* variables with the API key redacted."""
        summary = {}
        for env_var in self.env_var_names():
            if env_var in os.environ:
                summary[env_var] = (
                    "<redacted>" if "API_KEY" in env_var else os.environ[env_var]
                )
        return summary
