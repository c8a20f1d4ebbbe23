"""Add and remove dependency edges on a loaded project.

Both operations only touch the in-memory project; the caller saves the
manifest once the operation has succeeded.
"""

from __future__ import annotations

import logging
from typing import Callable

from svcdeps.errors import (
    DependencyExistsError,
    DependencyNotFoundError,
    NoDependenciesError,
    ServiceNotFoundError,
)
from svcdeps.manifest import ProjectConfig

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str, bool], bool]


def add_dependency(
    project: ProjectConfig,
    source: str,
    target: str,
    force: bool = False,
) -> list[str]:
    """Make source depend on target.

    Returns the resulting dependency list of source. With force, an existing
    edge is left as it is instead of raising. No cycle check is performed.
    """
    if source not in project.services:
        raise ServiceNotFoundError(source)
    if target not in project.services:
        raise ServiceNotFoundError(target)

    service = project.services[source]
    if target in (service.depends_on or []):
        if not force:
            raise DependencyExistsError(source, target)
        logger.debug("'%s' already depends on '%s', nothing to add", source, target)
        return list(service.depends_on)

    if service.depends_on is None:
        service.depends_on = [target]
    else:
        service.depends_on.append(target)

    logger.debug("Added dependency %s -> %s", source, target)
    return list(service.depends_on)


def remove_dependency(
    project: ProjectConfig,
    source: str,
    target: str,
    force: bool = False,
    confirm: ConfirmFn | None = None,
) -> bool:
    """Remove the edge source -> target.

    Unless force is set, confirm(prompt, default) is asked first.

    Returns True if the removal was cancelled at the confirmation step,
    False once the edge has been removed.
    """
    if source not in project.services:
        raise ServiceNotFoundError(source)

    service = project.services[source]
    if not service.depends_on:
        raise NoDependenciesError(source)
    if target not in service.depends_on:
        raise DependencyNotFoundError(source, target)

    if not force:
        if confirm is None:
            raise ValueError("confirm callback is required when force is not set")
        prompt = f"Are you sure you want to remove the dependency from '{source}' to '{target}'?"
        if not confirm(prompt, False):
            logger.debug("Removal of %s -> %s cancelled", source, target)
            return True

    # list.remove drops only the first match
    service.depends_on.remove(target)
    if not service.depends_on:
        service.depends_on = None

    logger.debug("Removed dependency %s -> %s", source, target)
    return False
