"""Load and save the project manifest (services and their dependsOn lists)."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from svcdeps.errors import ManifestError

DEPENDS_ON_KEY = "dependsOn"


@dataclass
class ServiceConfig:
    name: str
    depends_on: list[str] | None = None  # None is the canonical "no dependencies" form
    extra: dict[str, Any] = field(default_factory=dict)  # project, language, host, ...


@dataclass
class ProjectConfig:
    name: str = ""
    services: dict[str, ServiceConfig] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list)  # top-level keys as loaded

    def service_names(self) -> list[str]:
        """Service names in manifest order."""
        return list(self.services.keys())


def _parse_depends_on(service_name: str, raw: Any) -> list[str] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ManifestError(
            f"failed to load project configuration: service '{service_name}' "
            f"has a non-list {DEPENDS_ON_KEY} value"
        )
    deps = [str(d) for d in raw]
    return deps or None


def parse_project(data: Any) -> ProjectConfig:
    """Build a ProjectConfig from an already-parsed manifest document."""
    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ManifestError("failed to load project configuration: manifest root must be a mapping")

    services = data.get("services") or {}
    if not isinstance(services, dict):
        raise ManifestError("failed to load project configuration: services must be a mapping")

    extra = {k: v for k, v in data.items() if k not in ("name", "services")}
    project = ProjectConfig(
        name=str(data.get("name") or ""),
        extra=extra,
        key_order=[str(k) for k in data],
    )

    for svc_name, svc_data in services.items():
        svc_name = str(svc_name)
        svc_data = svc_data or {}
        if not isinstance(svc_data, dict):
            raise ManifestError(
                f"failed to load project configuration: service '{svc_name}' must be a mapping"
            )
        project.services[svc_name] = ServiceConfig(
            name=svc_name,
            depends_on=_parse_depends_on(svc_name, svc_data.get(DEPENDS_ON_KEY)),
            extra={k: v for k, v in svc_data.items() if k != DEPENDS_ON_KEY},
        )
    return project


def load_project(path: str | Path) -> ProjectConfig:
    """Load the manifest at path and return the parsed project."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ManifestError(f"failed to load project configuration: {exc}") from exc
    return parse_project(data)


def project_to_dict(project: ProjectConfig) -> dict[str, Any]:
    """Render the project back into manifest shape.

    Top-level keys keep the order they were loaded in. Services without
    dependencies carry no dependsOn key.
    """
    services: dict[str, Any] = {}
    for svc in project.services.values():
        entry = dict(svc.extra)
        if svc.depends_on:
            entry[DEPENDS_ON_KEY] = list(svc.depends_on)
        services[svc.name] = entry

    sections: dict[str, Any] = {}
    if project.name:
        sections["name"] = project.name
    sections.update(project.extra)
    sections["services"] = services

    doc = {key: sections[key] for key in project.key_order if key in sections}
    for key, value in sections.items():
        doc.setdefault(key, value)
    return doc


def save_project(project: ProjectConfig, path: str | Path) -> None:
    """Write the whole project to path, replacing its previous contents.

    The document goes to a temporary file next to path which then replaces
    the manifest, so a failed write leaves the old manifest intact.
    """
    try:
        content = yaml.safe_dump(project_to_dict(project), sort_keys=False, default_flow_style=False)
    except yaml.YAMLError as exc:
        raise ManifestError(f"failed to save project configuration: {exc}") from exc

    target = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ManifestError(f"failed to save project configuration: {exc}") from exc
