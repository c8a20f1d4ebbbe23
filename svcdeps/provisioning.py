"""Dependency expressions for generated per-provider module trees.

Unlike the handlers in svcdeps.handlers, every reference here is namespaced
with a caller-supplied prefix matching the generated resource or module names.
"""

from __future__ import annotations

import logging

from svcdeps.dependency_graph import build_dependency_graph
from svcdeps.handlers import Provider
from svcdeps.manifest import ProjectConfig

logger = logging.getLogger(__name__)


def build_bicep_depends_on(dependencies: list[str], resource_prefix: str) -> str:
    """Format dependencies as a Bicep dependsOn array of resource ids."""
    if not dependencies:
        return ""
    items = [f"{resource_prefix}_{dep}.id" for dep in dependencies]
    return f"dependsOn: [{', '.join(items)}]"


def build_terraform_depends_on(dependencies: list[str], module_prefix: str) -> str:
    """Format dependencies as a Terraform depends_on list of module references."""
    if not dependencies:
        return ""
    items = [f"module.{module_prefix}_{dep}" for dep in dependencies]
    return f"depends_on = [{', '.join(items)}]"


def build_depends_on_for_provider(provider: Provider, dependencies: list[str], prefix: str) -> str:
    if provider is Provider.TERRAFORM:
        return build_terraform_depends_on(dependencies, prefix)
    return build_bicep_depends_on(dependencies, prefix)


def _log_dependency_structure(project: ProjectConfig, label: str) -> None:
    if not any(svc.depends_on for svc in project.services.values()):
        return

    logger.info("Processing service dependencies for %s infrastructure...", label)
    for name, dependencies in build_dependency_graph(project).items():
        if dependencies:
            logger.info("Service '%s' has these dependencies: %s", name, ", ".join(dependencies))
    logger.info(
        "Dependency handling complete. Any service dependencies will be "
        "reflected in the generated infrastructure."
    )


def process_service_dependencies_in_bicep(project: ProjectConfig) -> None:
    _log_dependency_structure(project, "Bicep")


def process_service_dependencies_in_terraform(project: ProjectConfig) -> None:
    _log_dependency_structure(project, "Terraform")


def process_service_dependencies(project: ProjectConfig, provider: Provider) -> None:
    if provider is Provider.TERRAFORM:
        process_service_dependencies_in_terraform(project)
    else:
        process_service_dependencies_in_bicep(project)
