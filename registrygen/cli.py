"""CLI entrypoints for registrygen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import RegistryDefinition, RegistryGenConfig, ScriptRequest, load_config
from .creator import RegistryCreator
from .errors import ConfigError, RegistryError
from .logging import configure_logging
from .pipeline import RegistryPipeline


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default(False),
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--config",
        default=default("."),
        help="Path to .registrygen.yml or the directory holding it (defaults to current directory).",
    )


def _add_registry_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--registry",
        action="append",
        metavar="NAME",
        help="Registry to process; repeat for several (defaults to every configured registry).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="registrygen",
        description="Generate stable key enums and bind asset files into registries.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Scan asset folders, allocate stable ids, and write the key enum.",
    )
    _add_common_options(generate_parser, suppress_default=True)
    _add_registry_option(generate_parser)

    bind_parser = subparsers.add_parser(
        "bind",
        help="Bind discovered files to members of the generated key enum.",
    )
    _add_common_options(bind_parser, suppress_default=True)
    _add_registry_option(bind_parser)
    bind_parser.add_argument(
        "--generate",
        action="store_true",
        help="Regenerate the key enum before binding.",
    )

    reset_parser = subparsers.add_parser(
        "reset",
        help="Clear the saved registry mapping.",
    )
    _add_common_options(reset_parser, suppress_default=True)
    _add_registry_option(reset_parser)

    create_parser = subparsers.add_parser(
        "create",
        help="Generate a registry class, its editor, and missing key/value stubs.",
    )
    _add_common_options(create_parser, suppress_default=True)
    create_parser.add_argument("--script-name", help="Registry class name (defaults to RegisterObject).")
    create_parser.add_argument("--root", help="Folder the registry class is written to.")
    create_parser.add_argument("--namespace", help="Namespace of the registry class.")
    create_parser.add_argument("--key-type", help="Key enum type name.")
    create_parser.add_argument("--key-namespace", help="Namespace of the key enum.")
    create_parser.add_argument("--value-type", help="Value type name.")
    create_parser.add_argument("--value-namespace", help="Namespace of the value type.")
    create_parser.add_argument("--file-type", help="Asset type loaded from discovered files.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for registrygen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        config = load_config(Path(args.config))
        if args.command == "generate":
            _run_generate(config, args)
        elif args.command == "bind":
            _run_bind(config, args)
        elif args.command == "reset":
            _run_reset(config, args)
        elif args.command == "create":
            _run_create(config, args)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except RegistryError as exc:
        parser.exit(1, f"registrygen {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_generate(config: RegistryGenConfig, args: argparse.Namespace) -> None:
    pipeline = RegistryPipeline()
    for definition in _select_registries(config, args.registry):
        id_map = pipeline.generate_enum(definition)
        print(f"{definition.enum_name}: {len(id_map)} members written to {_relativize(definition.enum_script_root)}")


def _run_bind(config: RegistryGenConfig, args: argparse.Namespace) -> None:
    pipeline = RegistryPipeline()
    for definition in _select_registries(config, args.registry):
        if args.generate:
            pipeline.generate_enum(definition)
        outcome = pipeline.bind(definition)
        message = f"{definition.name}: {len(outcome.mapping)} entries bound"
        if outcome.skipped:
            message += f", {len(outcome.skipped)} skipped"
        print(message)


def _run_reset(config: RegistryGenConfig, args: argparse.Namespace) -> None:
    pipeline = RegistryPipeline()
    for definition in _select_registries(config, args.registry):
        cleared = pipeline.reset(definition)
        print(f"{definition.name}: mapping cleared ({cleared} entries)")


def _run_create(config: RegistryGenConfig, args: argparse.Namespace) -> None:
    requests = _script_requests(config, args)
    creator = RegistryCreator()
    for request in requests:
        for path in creator.create(request):
            print(f"Wrote {_relativize(path)}")


def _select_registries(config: RegistryGenConfig, names: List[str] | None) -> List[RegistryDefinition]:
    if names:
        return [config.registry(name) for name in names]
    if not config.registries:
        raise ConfigError("No registries configured. Add a 'registries' list to .registrygen.yml.")
    return list(config.registries)


def _script_requests(config: RegistryGenConfig, args: argparse.Namespace) -> List[ScriptRequest]:
    if args.key_type or args.value_type or args.file_type:
        request = ScriptRequest(
            root=Path(args.root) if args.root else config.root / "Assets",
            namespace=args.namespace or "",
            key_type=args.key_type or "",
            key_namespace=args.key_namespace or "",
            value_type=args.value_type or "",
            value_namespace=args.value_namespace or "",
            file_type=args.file_type or "",
        )
        if args.script_name:
            request.script_name = args.script_name
        return [request]
    if not config.scripts:
        raise ConfigError("No scripts configured. Pass --key-type/--value-type/--file-type or add a 'scripts' list.")
    if not args.script_name:
        return list(config.scripts)
    selected = [request for request in config.scripts if request.script_name == args.script_name]
    if not selected:
        raise ConfigError(f"No configured script named '{args.script_name}'")
    return selected


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
