from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .core.builder import build_engine
from .core.engine import AccessEngine
from .core.errors import RoleGateError
from .schema import iter_schema_errors
from .store.config_loader import parse_config_text

EXIT_OK = 0
EXIT_DENIED = 1
EXIT_USAGE = 2
EXIT_SCHEMA_ERRORS = 3
EXIT_MODEL_ERRORS = 4
EXIT_ENV = 5


def _print(obj: Any, fmt: str = "json") -> None:
    if fmt == "json":
        sys.stdout.write(json.dumps(obj, ensure_ascii=False, indent=None) + "\n")
    elif isinstance(obj, str):
        sys.stdout.write(obj if obj.endswith("\n") else obj + "\n")
    else:
        sys.stdout.write(str(obj) + "\n")


def _read_doc(path: Optional[str]) -> Dict[str, Any]:
    if not path or path == "-":
        return parse_config_text(sys.stdin.read())
    with open(path, "r", encoding="utf-8") as f:
        return parse_config_text(f.read(), filename=path)


def _build(ns: argparse.Namespace) -> AccessEngine:
    doc = _read_doc(ns.config)
    return build_engine(
        doc,
        strict_conflicts=bool(getattr(ns, "strict", False)),
        strict_resources=not bool(getattr(ns, "lenient", False)),
    )


def cmd_validate(ns: argparse.Namespace) -> int:
    fmt = getattr(ns, "format", "text")
    doc = _read_doc(ns.config)
    try:
        errors = iter_schema_errors(doc)
    except RuntimeError as e:
        _print(str(e), "text")
        return EXIT_ENV
    if errors:
        if fmt == "json":
            _print(errors)
        else:
            for err in errors:
                _print(f"{err['path'] or '<root>'}: {err['message']}", "text")
        return EXIT_SCHEMA_ERRORS

    try:
        build_engine(doc, strict_conflicts=bool(getattr(ns, "strict", False)))
    except (RoleGateError, ValueError) as e:
        problem = {"message": str(e), "error": type(e).__name__}
        _print([problem] if fmt == "json" else f"{problem['error']}: {problem['message']}", fmt)
        return EXIT_MODEL_ERRORS

    _print([] if fmt == "json" else "OK", fmt)
    return EXIT_OK


def cmd_check(ns: argparse.Namespace) -> int:
    fmt = getattr(ns, "format", "text")
    try:
        engine = _build(ns)
        decision = engine.evaluate(ns.role, ns.resource, ns.action)
    except RoleGateError as e:
        _print({"error": type(e).__name__, "message": str(e)} if fmt == "json" else str(e), fmt)
        return EXIT_MODEL_ERRORS
    if fmt == "json":
        _print(
            {
                "allowed": decision.allowed,
                "role": decision.role,
                "resource": decision.resource,
                "action": decision.action,
                "reason": decision.reason,
                "via_role": decision.via_role,
            }
        )
    else:
        via = f" via {decision.via_role}" if decision.via_role else ""
        _print(f"{decision.effect.upper()} ({decision.reason}{via})", "text")
    return EXIT_OK if decision.allowed else EXIT_DENIED


def cmd_map(ns: argparse.Namespace) -> int:
    fmt = getattr(ns, "format", "text")
    try:
        access = _build(ns).access_map(ns.role)
    except RoleGateError as e:
        _print({"error": type(e).__name__, "message": str(e)} if fmt == "json" else str(e), fmt)
        return EXIT_MODEL_ERRORS
    if fmt == "json":
        _print(access)
    else:
        lines: List[str] = [
            f"{resource}.{action}: {value}"
            for resource, actions in access.items()
            for action, value in actions.items()
        ]
        _print("\n".join(lines), "text")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rolegate", description="rolegate access-control tools")
    p.add_argument("--version", action="store_true", help="print version and exit")
    sub = p.add_subparsers(dest="command")

    def _common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("config", help="configuration file (JSON or YAML); '-' for stdin")
        sp.add_argument("--format", choices=("json", "text"), default="text")
        sp.add_argument(
            "--strict", action="store_true", help="reject rules both allowed and denied"
        )

    v = sub.add_parser("validate", help="validate a configuration document")
    _common(v)
    v.set_defaults(func=cmd_validate)

    c = sub.add_parser("check", help="decide one role/resource/action query")
    _common(c)
    c.add_argument("role")
    c.add_argument("resource")
    c.add_argument("action")
    c.add_argument("--lenient", action="store_true", help="deny unknown resources instead of failing")
    c.set_defaults(func=cmd_check)

    m = sub.add_parser("map", help="print the access map of a role")
    _common(m)
    m.add_argument("role")
    m.set_defaults(func=cmd_map)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.version:
        _print(f"rolegate {__version__}", "text")
        return EXIT_OK
    func = getattr(ns, "func", None)
    if func is None:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE
    try:
        return int(func(ns))
    except FileNotFoundError as e:
        _print(f"file not found: {e.filename}", "text")
        return EXIT_USAGE
    except (json.JSONDecodeError, ValueError) as e:
        _print(f"invalid configuration: {e}", "text")
        return EXIT_MODEL_ERRORS
    except ImportError as e:
        _print(f"missing optional dependency: {e}", "text")
        return EXIT_ENV


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
