"""Infrastructure-provider dependency handlers.

Each handler renders a service's dependency list in its provider's native
reference syntax. Handlers are selected by provider key through
get_dependency_handler_for_provider().
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod

from svcdeps.dependency_graph import count_dependencies
from svcdeps.manifest import ProjectConfig

logger = logging.getLogger(__name__)


class Provider(str, enum.Enum):
    BICEP = "bicep"
    TERRAFORM = "terraform"

    @classmethod
    def parse(cls, key: str | None) -> "Provider":
        """Resolve a provider key case-insensitively, falling back to bicep."""
        normalized = (key or "").strip().lower()
        if not normalized:
            return cls.BICEP
        try:
            return cls(normalized)
        except ValueError:
            logger.warning("Unknown infrastructure provider: %s, using bicep handler", key)
            return cls.BICEP


class DependencyHandler(ABC):
    provider: Provider

    @abstractmethod
    def format_depends_on_expression(self, service: str, dependencies: list[str]) -> str:
        """Return the dependsOn expression for dependencies, or "" if there are none."""

    def process_dependencies(self, project: ProjectConfig) -> None:
        """Log how each service's dependencies would be expressed for this provider."""
        dependency_count = count_dependencies(project)
        if dependency_count == 0:
            return

        label = self.provider.value.capitalize()
        logger.info(
            "Processing %d service dependencies for %s infrastructure",
            dependency_count, label,
        )
        for name, service in project.services.items():
            if service.depends_on:
                expr = self.format_depends_on_expression(name, service.depends_on)
                logger.info("%s expression for %s: %s", label, name, expr)


class BicepDependencyHandler(DependencyHandler):
    provider = Provider.BICEP

    def format_depends_on_expression(self, service: str, dependencies: list[str]) -> str:
        if not dependencies:
            return ""
        items = [f"resource_{dep}.id" for dep in dependencies]
        return f"dependsOn: [{', '.join(items)}]"


class TerraformDependencyHandler(DependencyHandler):
    provider = Provider.TERRAFORM

    def format_depends_on_expression(self, service: str, dependencies: list[str]) -> str:
        if not dependencies:
            return ""
        items = [f"module.{dep}" for dep in dependencies]
        return f"depends_on = [{', '.join(items)}]"


_HANDLERS: dict[Provider, type[DependencyHandler]] = {
    Provider.BICEP: BicepDependencyHandler,
    Provider.TERRAFORM: TerraformDependencyHandler,
}


def get_dependency_handler_for_provider(provider: str | Provider | None) -> DependencyHandler:
    if not isinstance(provider, Provider):
        provider = Provider.parse(provider)
    return _HANDLERS[provider]()


def process_dependencies_for_provider(project: ProjectConfig, provider: str | Provider | None) -> None:
    get_dependency_handler_for_provider(provider).process_dependencies(project)
