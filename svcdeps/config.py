"""Configuration for svcdeps."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Project manifest holding the services and their dependsOn lists
    manifest_path: str = "project.yaml"

    # Infrastructure provider used by `synth` when --provider is not given
    infra_provider: str = "bicep"

    log_level: str = "INFO"

    # Run cycle detection after `dep add` and log any cycle as a warning
    warn_cycles_on_add: bool = True

    model_config = {"env_prefix": "SVCDEPS_"}


settings = Settings()
