"""Service dependency graph builder, validator and cycle detector."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from svcdeps.errors import ServiceNotFoundError
from svcdeps.manifest import ProjectConfig

logger = logging.getLogger(__name__)


@dataclass
class ServiceDependencyView:
    """Both directions of a service's dependency edges, for display."""
    service: str
    depends_on: list[str] = field(default_factory=list)
    required_by: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "service": self.service,
            "dependsOn": list(self.depends_on),
            "requiredBy": list(self.required_by),
        }


def build_dependency_graph(project: ProjectConfig) -> dict[str, list[str]]:
    """
    Build the forward adjacency map of the project.

    Returns:
        Mapping of every declared service to the services it depends on.
        Services without dependencies map to an empty list.
    """
    return {
        name: list(svc.depends_on or [])
        for name, svc in project.services.items()
    }


def count_dependencies(project: ProjectConfig) -> int:
    return sum(len(svc.depends_on or []) for svc in project.services.values())


def validate_service_dependencies(project: ProjectConfig) -> list[str]:
    """Check that every declared dependency names a service in the project.

    Returns one issue per (service, missing dependency) pair; empty when valid.
    """
    issues: list[str] = []
    if not project.services:
        return issues

    for service_name, service in project.services.items():
        for dependency in service.depends_on or []:
            if dependency not in project.services:
                issues.append(
                    f"Service '{service_name}' depends on '{dependency}', "
                    "but this service doesn't exist in the project."
                )
    return issues


def _find_cycle(
    project: ProjectConfig,
    current: str,
    visited: set[str],
    on_path: set[str],
    path: list[str],
) -> list[str] | None:
    """Depth-first search from current; returns the first cycle reached, if any.

    When a cycle is returned the search is abandoned, so on_path and path are
    left as they were at that point.
    """
    visited.add(current)
    on_path.add(current)
    path.append(current)

    service = project.services.get(current)
    for dep in (service.depends_on or []) if service else []:
        if dep not in visited:
            cycle = _find_cycle(project, dep, visited, on_path, path)
            if cycle is not None:
                return cycle
        elif dep in on_path:
            start = path.index(dep)
            return path[start:] + [dep]

    on_path.discard(current)
    path.pop()
    return None


def detect_cyclic_dependencies(project: ProjectConfig) -> list[str]:
    """Report dependency cycles, at most one per DFS root.

    Roots are tried in manifest order. A service already reached from an
    earlier root is never used as a root itself, so this is not an exhaustive
    enumeration of every cycle in the graph.
    """
    cycles: list[str] = []
    visited: set[str] = set()

    for root in project.services:
        if root in visited:
            continue
        cycle = _find_cycle(project, root, visited, set(), [])
        if cycle is not None:
            cycles.append(f"Cyclic dependency detected: {' -> '.join(cycle)}")

    return cycles


def build_dependency_views(
    project: ProjectConfig,
    service_name: str | None = None,
) -> list[ServiceDependencyView]:
    """
    Build the bidirectional view of every service, sorted by name.

    Args:
        project: Loaded project
        service_name: Restrict the result to this service

    Raises:
        ServiceNotFoundError: service_name is not declared in the project
    """
    views = {name: ServiceDependencyView(service=name) for name in project.services}

    for name, service in project.services.items():
        for dependency in service.depends_on or []:
            views[name].depends_on.append(dependency)
            # Dangling targets have no view to attach the reverse edge to
            if dependency in views:
                views[dependency].required_by.append(name)

    for view in views.values():
        view.depends_on.sort()
        view.required_by.sort()

    if service_name is not None:
        if service_name not in views:
            raise ServiceNotFoundError(service_name)
        return [views[service_name]]

    return [views[name] for name in sorted(views)]


def log_service_dependencies(project: ProjectConfig) -> None:
    """Log a summary of declared dependencies and any detected cycles."""
    dependency_count = count_dependencies(project)
    if dependency_count == 0:
        return

    logger.info("Found %d service dependencies in the project", dependency_count)
    for name, service in project.services.items():
        if service.depends_on:
            logger.info("Service '%s' depends on: %s", name, ", ".join(service.depends_on))

    cycles = detect_cyclic_dependencies(project)
    if cycles:
        logger.warning("Cyclic dependencies detected in service configuration:")
        for cycle in cycles:
            logger.warning("  - %s", cycle)
