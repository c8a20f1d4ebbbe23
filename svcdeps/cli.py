"""Command-line interface: python -m svcdeps

Manages dependencies between the services declared in a project manifest.

Usage:
    python -m svcdeps dep add api database      # api now depends on database
    python -m svcdeps dep add                   # prompt for both services
    python -m svcdeps dep list [api] [--output json]
    python -m svcdeps dep remove api database [--force]
    python -m svcdeps validate [--strict]
    python -m svcdeps synth --provider terraform [--prefix svc]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from svcdeps.config import settings
from svcdeps.console import confirm, select_one
from svcdeps.dependency_graph import (
    build_dependency_graph,
    build_dependency_views,
    detect_cyclic_dependencies,
    log_service_dependencies,
    validate_service_dependencies,
)
from svcdeps.errors import NoDependenciesError, ServiceNotFoundError, SvcDepsError
from svcdeps.handlers import Provider, get_dependency_handler_for_provider
from svcdeps.manifest import ProjectConfig, load_project, save_project
from svcdeps.mutations import add_dependency, remove_dependency
from svcdeps.provisioning import build_depends_on_for_provider, process_service_dependencies

logger = logging.getLogger(__name__)


def _load_with_services(path: str) -> ProjectConfig:
    project = load_project(path)
    if not project.services:
        raise SvcDepsError("no services defined in project. Add services to the manifest first")
    return project


def _prompt_source(project: ProjectConfig, message: str) -> str:
    names = project.service_names()
    return names[select_one(message, names)]


def _require_service(project: ProjectConfig, name: str) -> None:
    if name not in project.services:
        raise ServiceNotFoundError(name)


def cmd_dep_add(args: argparse.Namespace) -> int:
    project = _load_with_services(args.manifest)

    source, target = args.service, args.dependency
    if source is None:
        source = _prompt_source(project, "Select a service")
    _require_service(project, source)

    if target is None:
        candidates = [name for name in project.service_names() if name != source]
        if not candidates:
            raise SvcDepsError("no other services available to depend on. Add more services first")
        target = candidates[select_one(f"Select a service that {source} depends on", candidates)]

    add_dependency(project, source, target, force=args.force)
    save_project(project, args.manifest)
    print(f"Dependency created: '{source}' now depends on '{target}'")

    if settings.warn_cycles_on_add:
        for cycle in detect_cyclic_dependencies(project):
            logger.warning(cycle)
    return 0


def cmd_dep_list(args: argparse.Namespace) -> int:
    project = _load_with_services(args.manifest)
    views = build_dependency_views(project, args.service)

    if args.output == "json":
        print(json.dumps([v.to_dict() for v in views], indent=2))
        return 0

    width = max(len("SERVICE"), *(len(v.service) for v in views))
    deps_width = max(len("DEPENDS ON"), *(len(", ".join(v.depends_on)) for v in views))
    print(f"{'SERVICE':<{width}}  {'DEPENDS ON':<{deps_width}}  REQUIRED BY")
    for v in views:
        depends_on = ", ".join(v.depends_on) or "-"
        required_by = ", ".join(v.required_by) or "-"
        print(f"{v.service:<{width}}  {depends_on:<{deps_width}}  {required_by}")
    return 0


def cmd_dep_remove(args: argparse.Namespace) -> int:
    project = _load_with_services(args.manifest)

    source, target = args.service, args.dependency
    if source is None:
        source = _prompt_source(project, "Select a service to remove dependencies from")

    if target is None:
        _require_service(project, source)
        existing = project.services[source].depends_on
        if not existing:
            raise NoDependenciesError(source)
        target = existing[select_one(f"Select a dependency to remove from {source}", existing)]

    cancelled = remove_dependency(project, source, target, force=args.force, confirm=confirm)
    if cancelled:
        print("Dependency removal cancelled")
        return 0

    save_project(project, args.manifest)
    print(f"Dependency removed: '{source}' no longer depends on '{target}'")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    project = load_project(args.manifest)
    log_service_dependencies(project)

    issues = validate_service_dependencies(project)
    cycles = detect_cyclic_dependencies(project)
    for finding in issues + cycles:
        print(f"WARNING: {finding}")

    if not issues and not cycles:
        print(f"{len(project.services)} service(s) checked, no dependency issues found")
        return 0
    print(f"{len(issues)} missing dependency reference(s), {len(cycles)} cycle(s)")
    return 1 if args.strict else 0


def cmd_synth(args: argparse.Namespace) -> int:
    project = load_project(args.manifest)
    provider = Provider.parse(args.provider if args.provider is not None else settings.infra_provider)
    handler = get_dependency_handler_for_provider(provider)

    process_service_dependencies(project, provider)
    handler.process_dependencies(project)

    graph = build_dependency_graph(project)
    emitted = 0
    for name in sorted(graph):
        dependencies = graph[name]
        if not dependencies:
            continue
        if args.prefix:
            expr = build_depends_on_for_provider(provider, dependencies, args.prefix)
        else:
            expr = handler.format_depends_on_expression(name, dependencies)
        print(f"{name}: {expr}")
        emitted += 1

    if not emitted:
        print("No service dependencies to synthesize.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcdeps",
        description="Manage dependencies between services in a project manifest",
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help=f"Path to the project manifest (default: {settings.manifest_path})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level (default: {settings.log_level})",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    dep = commands.add_parser("dep", help="Manage service dependencies")
    dep_commands = dep.add_subparsers(dest="dep_command", required=True)

    def add_edge_arguments(sub: argparse.ArgumentParser, force_help: str) -> None:
        sub.add_argument("service", nargs="?", help="Service that has the dependency")
        sub.add_argument("dependency", nargs="?", help="Service being depended on")
        sub.add_argument("--force", action="store_true", help=force_help)

    add = dep_commands.add_parser("add", help="Define a dependency between services")
    add_edge_arguments(add, "Succeed even if the dependency already exists")
    add.set_defaults(func=cmd_dep_add)

    lst = dep_commands.add_parser("list", help="List dependencies between services")
    lst.add_argument("service", nargs="?", help="Only show this service")
    lst.add_argument("--output", choices=["table", "json"], default="table")
    lst.set_defaults(func=cmd_dep_list)

    remove = dep_commands.add_parser("remove", help="Remove a dependency between services")
    add_edge_arguments(remove, "Remove the dependency without a confirmation prompt")
    remove.set_defaults(func=cmd_dep_remove)

    gen = commands.add_parser("gen", help="Generate project configuration")
    gen_commands = gen.add_subparsers(dest="gen_command", required=True)
    gen_deps = gen_commands.add_parser("deps", help="Define a dependency between services")
    add_edge_arguments(gen_deps, "Succeed even if the dependency already exists")
    gen_deps.set_defaults(func=cmd_dep_add)

    validate = commands.add_parser("validate", help="Check for missing and cyclic dependencies")
    validate.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any dependency issue is found",
    )
    validate.set_defaults(func=cmd_validate)

    synth = commands.add_parser("synth", help="Print infrastructure dependsOn expressions")
    synth.add_argument("--provider", default=None, help="bicep or terraform")
    synth.add_argument("--prefix", default="", help="Namespace references for generated module trees")
    synth.set_defaults(func=cmd_synth)

    return parser


def cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level_name = (args.log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.manifest is None:
        args.manifest = settings.manifest_path

    try:
        return args.func(args)
    except SvcDepsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
