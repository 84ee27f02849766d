"""CLI entrypoints for componentlab commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import StoreError
from .importers import read_files, read_folder
from .logging import configure_logging
from .models import ImportOverrides, ImportRequest, SnippetPayload
from .store import ComponentStore


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_override_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", help="Component name (also determines its id).")
    parser.add_argument("--description", help="Short description.")
    parser.add_argument("--framework", help="Force the framework instead of detecting it.")
    parser.add_argument("--platform", help="Target platform (defaults to the configured one).")
    parser.add_argument("--lang", dest="language_override", help="Source language label.")
    parser.add_argument("--version", dest="component_version", help="Component version.")
    parser.add_argument("--author", help="Component author.")
    parser.add_argument("--tag", dest="tags", action="append", default=[], help="Add a tag (repeatable).")
    parser.add_argument("--main-file", help="Designate the main file explicitly.")
    parser.add_argument(
        "--external-style",
        dest="external_styles",
        action="append",
        default=[],
        help="Reference an external stylesheet (repeatable).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="componentlab",
        description="Manage a local library of reusable components and snippets.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--root",
        help="Store directory (overrides store.root from .componentlab.yml).",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .componentlab.yml or the directory holding it.",
    )
    parser.add_argument(
        "--log-file",
        help="Also write DEBUG-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List stored components.")
    _add_verbose_option(list_parser, suppress_default=True)
    list_parser.add_argument("--query", help="Match name, description or tags.")
    list_parser.add_argument("--framework", help="Only show this framework.")
    list_parser.add_argument("--platform", help="Only show this platform.")
    list_parser.add_argument("--tag", dest="tags", action="append", default=[], help="Require a tag.")
    list_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table.")

    show_parser = subparsers.add_parser("show", help="Show a component and its files.")
    _add_verbose_option(show_parser, suppress_default=True)
    show_parser.add_argument("id")

    delete_parser = subparsers.add_parser("delete", help="Delete a component.")
    _add_verbose_option(delete_parser, suppress_default=True)
    delete_parser.add_argument("id")
    delete_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")

    import_parser = subparsers.add_parser("import", help="Import a folder, files or a snippet.")
    _add_verbose_option(import_parser, suppress_default=True)
    import_sub = import_parser.add_subparsers(dest="kind", required=True)

    folder_parser = import_sub.add_parser("folder", help="Import a whole folder.")
    folder_parser.add_argument("path")
    _add_override_options(folder_parser)

    files_parser = import_sub.add_parser("files", help="Import loosely selected files.")
    files_parser.add_argument("paths", nargs="+")
    _add_override_options(files_parser)

    snippet_parser = import_sub.add_parser("snippet", help="Import a code snippet.")
    snippet_parser.add_argument("snippet_name", metavar="name")
    snippet_parser.add_argument("--language", default="javascript", help="Snippet language tag.")
    source = snippet_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--code", help="Snippet source text.")
    source.add_argument("--file", help="Read the snippet from a file ('-' for stdin).")
    _add_override_options(snippet_parser)

    export_parser = subparsers.add_parser("export", help="Export one component to a JSON file.")
    _add_verbose_option(export_parser, suppress_default=True)
    export_parser.add_argument("id")
    export_parser.add_argument("destination")

    restore_parser = subparsers.add_parser(
        "import-export", help="Store a component from a JSON export file."
    )
    _add_verbose_option(restore_parser, suppress_default=True)
    restore_parser.add_argument("path")

    serve_parser = subparsers.add_parser("serve", help="Run the local HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", help="Bind address.")
    serve_parser.add_argument("--port", type=int, help="Bind port.")

    return parser


def _overrides_from_args(args: argparse.Namespace) -> ImportOverrides:
    return ImportOverrides(
        name=args.name,
        description=args.description,
        framework=args.framework,
        platform=args.platform,
        language=args.language_override,
        version=args.component_version,
        author=args.author,
        tags=list(args.tags),
        main_file=args.main_file,
        external_styles=list(args.external_styles),
    )


def _build_import_request(args: argparse.Namespace, store: ComponentStore) -> ImportRequest:
    overrides = _overrides_from_args(args)
    settings = store.import_config
    if args.kind == "folder":
        payload = read_folder(
            args.path, extensions=settings.extensions, skip_dirs=settings.skip_dirs
        )
        return ImportRequest(kind="folder", payload=payload, overrides=overrides)
    if args.kind == "files":
        return ImportRequest(kind="files", payload=read_files(args.paths), overrides=overrides)

    if args.code is not None:
        code = args.code
    elif args.file == "-":
        code = sys.stdin.read()
    else:
        code = Path(args.file).expanduser().read_text(encoding="utf-8")
    overrides.name = overrides.name or args.snippet_name
    return ImportRequest(
        kind="snippet",
        payload=SnippetPayload(code=code, language=args.language),
        overrides=overrides,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for componentlab commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.root:
        config.store.root = Path(args.root).expanduser().resolve()

    store = ComponentStore.from_config(config)

    try:
        if args.command == "list":
            entries = store.search(
                args.query, framework=args.framework, platform=args.platform, tags=args.tags
            )
            if args.json:
                print(json.dumps([entry.meta.to_dict() for entry in entries], indent=2))
            elif not entries:
                print("No components found")
            else:
                for entry in entries:
                    tags = f" [{', '.join(entry.meta.tags)}]" if entry.meta.tags else ""
                    print(f"{entry.meta.id}\t{entry.shard}\t{entry.meta.name}{tags}")
        elif args.command == "show":
            record = store.get(args.id)
            print(json.dumps(record.to_dict(), indent=2))
        elif args.command == "delete":
            if not args.yes:
                answer = input(f"Delete component '{args.id}'? [y/N] ")
                if answer.strip().lower() not in {"y", "yes"}:
                    print("Aborted")
                    return
            store.delete(args.id)
            print(f"Deleted {args.id}")
        elif args.command == "import":
            meta = store.import_component(_build_import_request(args, store))
            print(f"Imported {meta.name} as {meta.framework}/{meta.id}")
        elif args.command == "export":
            path = store.export_component(args.id, args.destination)
            print(f"Exported {args.id} to {_relativize(path)}")
        elif args.command == "import-export":
            result = store.import_export(args.path)
            print(f"Stored {result.meta.name} at {_relativize(result.path)}")
        elif args.command == "serve":
            from .service import run_service

            run_service(
                config,
                host=args.host or config.service.host,
                port=args.port or config.service.port,
            )
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except StoreError as exc:
        parser.exit(1, f"{exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"componentlab {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
