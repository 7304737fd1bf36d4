"""CLI entry point for docsync."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.text import Text

from . import __version__
from .config import DocsyncFileConfig, load_config
from .loader import load_customizations, load_variables
from .templates import (
    TemplateContext,
    TemplateEngine,
    TemplateError,
    TemplateMetadata,
    TemplateValidationError,
)
from .ui import (
    OutputMode,
    add_output_mode_argument,
    configure_logging,
    make_console,
    render_help,
    render_table,
    resolve_output_mode,
)


def _find_repo_root() -> Path:
    """Walk up to find a .docsync or .git directory."""
    p = Path.cwd()
    while p != p.parent:
        if (p / ".docsync").exists() or (p / ".git").exists():
            return p
        p = p.parent
    return Path.cwd()


def _command_parser(prog: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=f"docsync {prog}")
    add_output_mode_argument(p)
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def _list_parser() -> argparse.ArgumentParser:
    return _command_parser("list")


def _show_parser() -> argparse.ArgumentParser:
    p = _command_parser("show")
    p.add_argument("name")
    return p


def _render_parser() -> argparse.ArgumentParser:
    p = _command_parser("render")
    p.add_argument("name")
    p.add_argument("--vars", type=Path, default=None, help="JSON or YAML variables file")
    p.add_argument("--fallback", action="store_true", help="Never fail; emit default content")
    p.add_argument("--fallback-vars", type=Path, default=None)
    p.add_argument("--version", dest="doc_version", default=None, help="Version for {{version}}")
    p.add_argument("--source", default=None, help="Source label for {{source}}")
    return p


def build_engine(cfg: DocsyncFileConfig) -> TemplateEngine:
    engine = TemplateEngine(max_passes=cfg.max_passes)
    if cfg.custom_dir is not None:
        for customization in load_customizations(cfg.custom_dir):
            engine.customize_template(customization)
    return engine


def _load_engine(console: Console) -> tuple[TemplateEngine, DocsyncFileConfig] | None:
    cfg = load_config(_find_repo_root())
    if cfg.error:
        console.print(Text(cfg.error, style="red"))
        return None
    try:
        engine = build_engine(cfg)
    except (OSError, TemplateValidationError) as exc:
        console.print(Text(str(exc), style="red"))
        return None
    return engine, cfg


def cmd_list(args: argparse.Namespace, mode: OutputMode) -> int:
    console = make_console(mode)
    err = make_console(mode, stderr=True)
    loaded = _load_engine(err)
    if loaded is None:
        return 1
    engine, _ = loaded

    rows = []
    for template in engine.list_templates():
        origin = "custom" if engine.get_custom_template(template.name) else "builtin"
        declared = ", ".join(var.name for var in template.variables)
        rows.append((template.name, template.kind, origin, declared))
    render_table(
        console,
        title="Templates",
        headers=("Name", "Kind", "Origin", "Variables"),
        rows=rows,
        no_wrap_columns=(0,),
    )
    return 0


def cmd_show(args: argparse.Namespace, mode: OutputMode) -> int:
    console = make_console(mode)
    err = make_console(mode, stderr=True)
    loaded = _load_engine(err)
    if loaded is None:
        return 1
    engine, _ = loaded

    template = engine.get_template(args.name)
    if template is None:
        err.print(Text(f"Template not found: {args.name}", style="red"))
        return 1

    console.print(Text(f"{template.name} ({template.kind})", style="bold"))
    if template.variables:
        render_table(
            console,
            headers=("Variable", "Type", "Required", "Description"),
            rows=[
                (var.name, var.type, "yes" if var.required else "no", var.description)
                for var in template.variables
            ],
            no_wrap_columns=(0,),
        )
    console.print()
    console.print(template.body, markup=False, highlight=False)
    return 0


def cmd_render(args: argparse.Namespace, mode: OutputMode) -> int:
    err = make_console(mode, stderr=True)
    loaded = _load_engine(err)
    if loaded is None:
        return 1
    engine, cfg = loaded

    try:
        variables = load_variables(args.vars) if args.vars else {}
        fallback = load_variables(args.fallback_vars) if args.fallback_vars else None
    except (OSError, ValueError, yaml.YAMLError) as exc:
        err.print(Text(str(exc), style="red"))
        return 1

    context = TemplateContext(
        variables=variables,
        metadata=TemplateMetadata.now(
            version=args.doc_version or cfg.version,
            source=args.source or cfg.source,
        ),
    )

    if args.fallback:
        output = engine.render_with_fallback(args.name, context, fallback)
    else:
        try:
            output = engine.render(args.name, context)
        except TemplateError as exc:
            err.print(Text(str(exc), style="red"))
            return 1

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


_COMMANDS = {
    "list": (_list_parser, cmd_list),
    "show": (_show_parser, cmd_show),
    "render": (_render_parser, cmd_render),
}


def _print_help(mode: OutputMode) -> None:
    render_help(
        output_mode=mode,
        command=f"docsync {__version__}",
        summary="Render documentation templates with conditionals and loops",
        usage=(
            "docsync list",
            "docsync show <name>",
            "docsync render <name> [--vars FILE] [--fallback] [--fallback-vars FILE]",
            "               [--version V] [--source S]",
        ),
        sections=(
            (
                "Commands",
                (
                    ("list", "List built-in and customized templates"),
                    ("show <name>", "Print a template body and its variables"),
                    ("render <name>", "Render a template to stdout"),
                ),
            ),
            (
                "Options",
                (
                    ("--output auto|plain|rich", "Output mode"),
                    ("-v, --verbose", "Debug logging on stderr"),
                    ("--version", "Show version"),
                ),
            ),
        ),
    )


def main(argv: list[str] | None = None) -> None:
    raw = argv if argv is not None else sys.argv[1:]

    if raw[:1] == ["--version"]:
        print(f"docsync {__version__}")
        sys.exit(0)
    if not raw or raw == ["--help"] or raw == ["-h"]:
        _print_help(resolve_output_mode())
        sys.exit(0)

    entry = _COMMANDS.get(raw[0])
    if entry is None:
        print(f"docsync: unknown command {raw[0]!r}", file=sys.stderr)
        sys.exit(2)

    make_parser, handler = entry
    args = make_parser().parse_args(raw[1:])
    try:
        mode = resolve_output_mode(args.output)
    except ValueError as exc:
        print(f"docsync: {exc}", file=sys.stderr)
        sys.exit(2)
    configure_logging(mode, verbose=args.verbose)
    sys.exit(handler(args, mode))


if __name__ == "__main__":
    main()
