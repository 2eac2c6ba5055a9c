"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from reading_assessment.models.assessment import DEFAULT_FLUENCY_CAP, ScoreVersion, Tunables


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if 'server' in data:
            flattened['host'] = data['server'].get('host')
            flattened['port'] = data['server'].get('port')
        if 'scoring' in data:
            scoring = data['scoring']
            flattened['fluency_cap'] = scoring.get('fluency_cap')
            flattened['accuracy_hard_floor'] = scoring.get('accuracy_hard_floor')
            flattened['score_version'] = scoring.get('score_version')
        if 'benchmarks' in data:
            flattened['benchmarks_file'] = data['benchmarks'].get('file')

        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scoring
    fluency_cap: float = Field(default=DEFAULT_FLUENCY_CAP, gt=0)
    accuracy_hard_floor: float | None = Field(default=None)
    score_version: str | None = Field(default=None)
    score_v2_enabled: bool = Field(default=False, description="Legacy v2 toggle")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)
    benchmarks_file: Path | None = Field(default=None)

    @field_validator("accuracy_hard_floor", "score_version", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in ("", "none", "null"):
            return None
        return value

    @property
    def resolved_score_version(self) -> str:
        """Explicit SCORE_VERSION wins; otherwise the legacy boolean decides."""
        if self.score_version is not None:
            return self.score_version.strip().lower()
        return ScoreVersion.V2 if self.score_v2_enabled else ScoreVersion.V1

    @property
    def benchmarks_path(self) -> Path:
        if self.benchmarks_file is not None:
            return self.benchmarks_file
        return self.project_root / "config" / "benchmarks.yaml"

    @property
    def results_dir(self) -> Path:
        d = self.project_root / "data" / "results"
        d.mkdir(parents=True, exist_ok=True)
        return d

    def to_tunables(self) -> Tunables:
        return Tunables(
            fluency_cap=self.fluency_cap,
            accuracy_hard_floor=self.accuracy_hard_floor,
            score_version=self.resolved_score_version,
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()


def load_tunables() -> Tunables:
    """Read a fresh tunables snapshot from configuration.

    Not cached, so edits to the environment or settings.yaml apply to the
    next scoring call.
    """
    return Settings().to_tunables()


def load_benchmark_rows(path: Path) -> list[dict]:
    """Load raw benchmark rows from a YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Benchmarks file not found: {path}")
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    return data.get('benchmarks', [])
