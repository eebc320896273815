from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from rootbuild.core.config.errors import ConfigError
from rootbuild.core.config.loader import load_descriptor
from rootbuild.core.descriptor import BuildDescriptor
from rootbuild.core.engine.engine import BuildEngine
from rootbuild.core.exceptions import ConfigurationError
from rootbuild.core.project.graph import ProjectGraph
from rootbuild.core.tasks.types import TaskStatus

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_CONFIGURATION = 2

DESCRIPTOR_CANDIDATES = ("build.yaml", "build.yml", "build.json")
SETTINGS_CANDIDATES = ("settings.yaml", "settings.yml", "settings.json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rootbuild", add_help=True)
    parser.add_argument("tasks", nargs="*", help="Tasks to invoke, in order (e.g. clean)")
    parser.add_argument("-p", "--project-dir", default=".", help="Directory holding the root descriptor")
    parser.add_argument("--descriptor", help="Descriptor file (default: build.yaml in the project dir)")
    parser.add_argument("--local", help="Optional local override file for the descriptor")
    parser.add_argument("--settings", help="Settings file listing included projects")
    parser.add_argument("--include", action="append", default=[], help="Include a project path (repeatable)")
    parser.add_argument("--list-tasks", action="store_true", help="List registered tasks and exit")
    parser.add_argument("--continue", dest="keep_going", action="store_true",
                        help="Keep invoking tasks after a failure")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print session events as JSON lines")
    return parser


def _first_existing(directory: Path, names: Sequence[str]) -> Path | None:
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _load_descriptor(args: argparse.Namespace, project_dir: Path) -> BuildDescriptor:
    descriptor_file = Path(args.descriptor) if args.descriptor else _first_existing(project_dir, DESCRIPTOR_CANDIDATES)
    if descriptor_file is None:
        try:
            declarations = load_descriptor(local_path=args.local)
        except ConfigError as e:
            raise ConfigurationError(message=str(e), details={"local": args.local}) from e
        return BuildDescriptor(project_dir.resolve(), declarations)
    return BuildDescriptor.from_file(descriptor_file, local_path=args.local)


def _load_graph(args: argparse.Namespace, project_dir: Path) -> ProjectGraph:
    settings_file = Path(args.settings) if args.settings else _first_existing(project_dir, SETTINGS_CANDIDATES)
    if settings_file is None:
        graph = ProjectGraph(root_dir=project_dir.resolve(), root_name=project_dir.resolve().name or "root")
    else:
        try:
            graph = ProjectGraph.load(settings_file, root_dir=project_dir.resolve())
        except (ConfigError, ValueError) as e:
            raise ConfigurationError(message=str(e), details={"settings": str(settings_file)}) from e
    for path in args.include:
        try:
            graph.include(path)
        except ValueError as e:
            raise ConfigurationError(message=str(e), details={"include": path}) from e
    return graph


def _print_events(engine: BuildEngine) -> None:
    for event in engine.ctx.events:
        print(json.dumps(event, ensure_ascii=False, default=str))


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    project_dir = Path(args.project_dir)

    engine: BuildEngine | None = None
    try:
        descriptor = _load_descriptor(args, project_dir)
        graph = _load_graph(args, project_dir)
        engine = BuildEngine(descriptor=descriptor, graph=graph, fail_fast=not args.keep_going)
        engine.configure()
    except ConfigurationError as e:
        if engine is not None and args.verbose:
            _print_events(engine)
        print(f"FAILURE: Build configuration failed: {e.message}", file=sys.stderr)
        if e.hint:
            print(f"* Try: {e.hint}", file=sys.stderr)
        return EXIT_CONFIGURATION

    if args.list_tasks:
        for task in descriptor.tasks.list():
            print(f"{task.name} ({task.group}) - {task.description}")
        return EXIT_OK

    result = engine.run_tasks(args.tasks)
    if args.verbose:
        _print_events(engine)

    for name, task_result in result.tasks.items():
        suffix = " UP-TO-DATE" if task_result.status == TaskStatus.UP_TO_DATE else ""
        if task_result.status == TaskStatus.FAILED:
            suffix = " FAILED"
        print(f"> Task :{name}{suffix}")
        if task_result.status == TaskStatus.FAILED:
            error = task_result.payload.get("error", {})
            print(f"  {error.get('message', task_result.summary)}", file=sys.stderr)
            if error.get("hint"):
                print(f"* Try: {error['hint']}", file=sys.stderr)

    if not result.ok:
        print("BUILD FAILED", file=sys.stderr)
        return EXIT_TASK_FAILED
    print("BUILD SUCCESSFUL")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
