"""Exceptions raised by svcdeps operations.

Validation findings (dangling references, cycles) are never raised; they are
returned as lists of messages. Everything here aborts the operation and leaves
the manifest untouched.
"""

from __future__ import annotations


class SvcDepsError(Exception):
    """Base class for all svcdeps failures."""
    pass


class ManifestError(SvcDepsError):
    """Raised when the project manifest cannot be read or written."""
    pass


class ServiceNotFoundError(SvcDepsError):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"service '{service}' not found in project")


class DependencyExistsError(SvcDepsError):
    def __init__(self, service: str, dependency: str):
        self.service = service
        self.dependency = dependency
        super().__init__(
            f"service '{service}' already depends on '{dependency}'. Use --force to overwrite"
        )


class NoDependenciesError(SvcDepsError):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"service '{service}' has no dependencies to remove")


class DependencyNotFoundError(SvcDepsError):
    def __init__(self, service: str, dependency: str):
        self.service = service
        self.dependency = dependency
        super().__init__(f"service '{service}' does not depend on '{dependency}'")


class PromptError(SvcDepsError):
    """Raised when an interactive selection cannot be completed."""
    pass
