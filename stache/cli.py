from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from .config import build_context, load_config, read_yaml_map, setup_logging
from .engine import TemplateEngine
from .errors import ConfigError, StacheUserError
from .template.lexer import tokenize_template
from .template.parser import parse_template
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stache",
        description="stache: compile and render {{mustache}}-style templates",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="configuration file (default: ./stache.yaml if present)",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="debug logging to stderr",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments of every subcommand
    def add_template(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("template", metavar="TEMPLATE", help="template file, or - for stdin")

    sp_render = sub.add_parser("render", help="render a template with a context")
    add_template(sp_render)
    sp_render.add_argument(
        "--context", "-c",
        metavar="FILE",
        help="YAML or JSON file with the context mapping",
    )
    sp_render.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="set a context value (dotted keys allowed, can be repeated)",
    )

    sp_compile = sub.add_parser("compile", help="print the generated Python source")
    add_template(sp_compile)

    sp_tokens = sub.add_parser("tokens", help="token list (JSON)")
    add_template(sp_tokens)

    sp_ast = sub.add_parser("ast", help="syntax tree (JSON)")
    add_template(sp_ast)

    return p


def _read_template(arg: str, encoding: str) -> str:
    """
    Reads the template argument.

    Supports two forms:
    - path to a file
    - ``-`` to read from stdin
    """
    if arg == "-":
        return sys.stdin.read()

    path = Path(arg)
    if not path.is_file():
        raise ConfigError(f"Template file not found: {path}")
    try:
        return path.read_text(encoding=encoding)
    except OSError as e:
        raise ConfigError(f"Failed to read template file {path}: {e}") from e


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        cfg = load_config(Path.cwd(), Path(ns.config) if ns.config else None)
        setup_logging(cfg.log_level, verbose=ns.verbose)

        text = _read_template(ns.template, cfg.encoding)
        engine = TemplateEngine()

        if ns.cmd == "render":
            data: Dict[str, Any] = {}
            if ns.context:
                data = read_yaml_map(Path(ns.context), cfg.encoding)
            context = build_context(cfg.defaults, data, ns.set)
            sys.stdout.write(engine.render(text, context))
            return 0

        if ns.cmd == "compile":
            sys.stdout.write(engine.compile(text).source)
            return 0

        if ns.cmd == "tokens":
            tokens = tokenize_template(text)
            sys.stdout.write(_dumps({"tokens": [t.to_dict() for t in tokens]}))
            return 0

        if ns.cmd == "ast":
            root = parse_template(tokenize_template(text))
            sys.stdout.write(_dumps(root.to_dict()))
            return 0

    except StacheUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
