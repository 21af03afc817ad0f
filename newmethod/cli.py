from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, Optional

from newmethod.core import config as config_mod
from newmethod.core import paths
from newmethod.core import queue as queue_mod
from newmethod.core.derive import RULES
from newmethod.core.editor import EditorContext
from newmethod.core.errors import InputCancelled, NewMethodError
from newmethod.core.pipeline import MethodGenerator
from newmethod.core.signature import parse_signature
from newmethod.core.template import derive_values
from newmethod.core.util import FileStore, short_text


VERSION = "0.1.0"


def _die(msg: str) -> None:
    print(msg, file=sys.stderr)
    sys.exit(1)


def _print_kv(title: str, value: str) -> None:
    print(f"{title}: {value}")


def _load_settings(args: argparse.Namespace) -> config_mod.Settings:
    settings = config_mod.load_settings(getattr(args, "config", None))
    return settings.with_overrides(
        root_directory=getattr(args, "root", None),
        template_names=getattr(args, "templates", None),
        method_template=getattr(args, "method_template", None),
    )


def _editor_from_args(args: argparse.Namespace) -> EditorContext:
    file_path = os.path.abspath(args.file) if args.file else None
    # command line positions are 1-based
    return EditorContext(
        file_path=file_path,
        line=max(args.line - 1, 0),
        column=max(args.column - 1, 0),
    )


def _signature_prompt(args: argparse.Namespace) -> Callable[[], Optional[str]]:
    if args.signature is not None:
        return lambda: args.signature
    from newmethod.tui import prompt_signature

    return prompt_signature


def cmd_create(args: argparse.Namespace) -> None:
    settings = _load_settings(args)
    generator = MethodGenerator(settings, _editor_from_args(args))
    insert = not args.no_insert
    tokens = generator.run(_signature_prompt(args), insert=insert)

    if args.quiet:
        return
    if insert:
        _print_kv("inserted", generator.editor.require_file())
    for name in settings.file_names():
        _print_kv("wrote", generator.target_path(name))
    if not tokens:
        print("no templates configured")


def cmd_inspect(args: argparse.Namespace) -> None:
    settings = _load_settings(args)
    sig = parse_signature(args.signature)
    _print_kv("name", sig.name)
    for param in sig.parameters:
        _print_kv("parameter", f"{param.name} {param.declared_type}".strip())
    for ret in sig.returns:
        _print_kv("return", ret.declared_type)
    if sig.notation is not None:
        _print_kv("notation", sig.notation)
    values = derive_values(sig, RULES, options={"disambiguate": settings.disambiguate_returns})
    for token, value in values.items():
        _print_kv(f"[[{token}]]", value)


def cmd_templates(args: argparse.Namespace) -> None:
    settings = _load_settings(args)
    generator = MethodGenerator(settings, EditorContext())
    store = FileStore()
    names = settings.file_names()
    if not names and not settings.method_template:
        print("no templates configured")
        return
    for name in names:
        path = generator.template_path(name)
        state = "ok" if store.exists(path) else "missing"
        print(f"{name}  {state}  {path}")
    if settings.method_template:
        path = generator.method_template_path()
        state = "ok" if store.exists(path) else "missing"
        print(f"(cursor) {settings.method_template}  {state}  {path}")


def cmd_init(args: argparse.Namespace) -> None:
    path = args.config or paths.settings_path()
    if os.path.exists(path) and not args.force:
        _die(f"settings already exist: {path} (use --force to overwrite)")
    config_mod.write_default_settings(path)
    os.makedirs(paths.queue_dir(), exist_ok=True)
    _print_kv("settings", path)


def _process_request(settings: config_mod.Settings, request: queue_mod.Request) -> str:
    editor = EditorContext(request.file, request.line, request.column)
    generator = MethodGenerator(settings, editor)
    try:
        generator.run(lambda: request.signature, insert=request.insert)
    except InputCancelled:
        return "cancelled"
    except NewMethodError as exc:
        print(f"{os.path.basename(request.source_file)}: {exc}", file=sys.stderr)
        return "failed"
    return "done"


def process_queue(
    settings: config_mod.Settings,
    queue_dir: Optional[str] = None,
    archive_dir: Optional[str] = None,
) -> dict[str, str]:
    """Run every queued request once. Returns {request file: outcome}."""
    outcomes: dict[str, str] = {}
    if queue_dir and not archive_dir:
        archive_dir = os.path.join(os.path.dirname(os.path.abspath(queue_dir)), "archive")
    for path in queue_mod.list_queue_files(queue_dir):
        request = queue_mod.parse_request(path)
        outcome = _process_request(settings, request) if request else "invalid"
        queue_mod.archive_file(path, suffix=outcome, archive_dir=archive_dir)
        outcomes[path] = outcome
    return outcomes


def cmd_exec(args: argparse.Namespace) -> None:
    settings = _load_settings(args)
    outcomes = process_queue(settings, args.path)
    if not outcomes:
        print("no queued requests")
        return
    for path, outcome in outcomes.items():
        print(f"{outcome:<9} {short_text(os.path.basename(path), 60)}")
    print(f"processed {len(outcomes)} request(s)")


def cmd_watch(args: argparse.Namespace) -> None:
    from newmethod.watcher import start_watching

    settings = _load_settings(args)
    queue_dir = args.path or paths.queue_dir()
    _print_kv("watching", queue_dir)
    start_watching(lambda: process_queue(settings, queue_dir), queue_dir)


def _add_settings_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="settings file (default: ~/.newmethod/settings.json)")
    parser.add_argument("--root", help="override rootDirectory")
    parser.add_argument("--templates", help="override templateNames (comma separated)")
    parser.add_argument("--method-template", help="override methodTemplate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newmethod")
    parser.add_argument(
        "--version", action="version", version=f"newmethod {VERSION}"
    )
    sub = parser.add_subparsers(dest="cmd")

    create = sub.add_parser("create", help="generate a method from templates")
    create.add_argument("--signature", "-s")
    create.add_argument("--file", "-f", help="file open in the editor")
    create.add_argument("--line", type=int, default=1)
    create.add_argument("--column", type=int, default=1)
    create.add_argument("--no-insert", action="store_true", help="skip the cursor insertion")
    create.add_argument("--quiet", "-q", action="store_true")
    _add_settings_args(create)
    create.set_defaults(func=cmd_create)

    inspect = sub.add_parser("inspect", help="show how a signature is parsed")
    inspect.add_argument("signature")
    _add_settings_args(inspect)
    inspect.set_defaults(func=cmd_inspect)

    templates = sub.add_parser("templates", help="list configured templates")
    _add_settings_args(templates)
    templates.set_defaults(func=cmd_templates)

    init = sub.add_parser("init", help="write default settings")
    init.add_argument("--config")
    init.add_argument("--force", action="store_true")
    init.set_defaults(func=cmd_init)

    exec_cmd = sub.add_parser("exec", help="process queued editor requests")
    exec_cmd.add_argument("--path", help="queue directory")
    _add_settings_args(exec_cmd)
    exec_cmd.set_defaults(func=cmd_exec)

    watch_cmd = sub.add_parser("watch", help="process editor requests as they arrive")
    watch_cmd.add_argument("--path", help="queue directory")
    _add_settings_args(watch_cmd)
    watch_cmd.set_defaults(func=cmd_watch)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except InputCancelled:
        sys.exit(1)
    except NewMethodError as exc:
        _die(str(exc))


if __name__ == "__main__":
    main()
