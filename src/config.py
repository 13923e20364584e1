"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_NARRATIVE_TEMPERATURE = 0.7
DEFAULT_DATA_DIR = Path.home() / ".miniworld" / "projects"


@dataclass
class Settings:
    """Settings for the narrative service and project storage."""

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    narrative_temperature: float = DEFAULT_NARRATIVE_TEMPERATURE
    data_dir: Path = DEFAULT_DATA_DIR

    @property
    def narrative_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Variables:
            GEMINI_API_KEY (falls back to API_KEY)
            MINIWORLD_GEMINI_MODEL
            MINIWORLD_NARRATIVE_TEMPERATURE
            MINIWORLD_DATA_DIR

        Raises:
            ValueError: If the temperature is not a number.
        """
        env = os.environ if environ is None else environ

        temperature = env.get("MINIWORLD_NARRATIVE_TEMPERATURE")
        data_dir = env.get("MINIWORLD_DATA_DIR")

        return cls(
            gemini_api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
            gemini_model=env.get("MINIWORLD_GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            narrative_temperature=(
                float(temperature) if temperature else DEFAULT_NARRATIVE_TEMPERATURE
            ),
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        )
