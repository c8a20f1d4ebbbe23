"""Service dependency management for multi-service project manifests.

Validates, queries and edits the ``dependsOn`` relationships between the
services of a project, and renders them as Bicep or Terraform expressions.
"""

from svcdeps.dependency_graph import (
    ServiceDependencyView,
    build_dependency_graph,
    build_dependency_views,
    detect_cyclic_dependencies,
    validate_service_dependencies,
)
from svcdeps.handlers import (
    BicepDependencyHandler,
    DependencyHandler,
    Provider,
    TerraformDependencyHandler,
    get_dependency_handler_for_provider,
)
from svcdeps.manifest import ProjectConfig, ServiceConfig, load_project, save_project
from svcdeps.mutations import add_dependency, remove_dependency

__all__ = [
    "BicepDependencyHandler",
    "DependencyHandler",
    "ProjectConfig",
    "Provider",
    "ServiceConfig",
    "ServiceDependencyView",
    "TerraformDependencyHandler",
    "add_dependency",
    "build_dependency_graph",
    "build_dependency_views",
    "detect_cyclic_dependencies",
    "get_dependency_handler_for_provider",
    "load_project",
    "remove_dependency",
    "save_project",
    "validate_service_dependencies",
]
