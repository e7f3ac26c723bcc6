"""Autoroute CLI — autoroute routes.

Entry point for the ``autoroute`` command-line interface.  ``autoroute
routes`` runs discovery against an in-memory host and prints the route
table, so a controller tree can be checked without starting a server.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from autoroute.registry import RouteRegistry


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the autoroute CLI."""
    parser = argparse.ArgumentParser(
        prog="autoroute",
        description="File-convention route discovery with layered authorization.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # autoroute routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Discover routes and print the route table",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument("--dir", default=None, help="Controller directory")
    routes_parser.add_argument(
        "--prefix", action="append", default=None, help="Route prefix (repeatable)",
    )
    routes_parser.add_argument(
        "--require-auth", action="store_true", help="Protect routes by default",
    )
    routes_parser.add_argument(
        "--force-public", action="append", default=None, metavar="PATTERN",
        help="Pattern that is always public (repeatable)",
    )
    routes_parser.add_argument(
        "--force-protected", action="append", default=None, metavar="PATTERN",
        help="Pattern that is always protected (repeatable)",
    )
    routes_parser.add_argument(
        "--no-strict", action="store_true", help="Accept plain object exports",
    )
    routes_parser.add_argument(
        "--quiet", action="store_true", help="Suppress discovery diagnostics",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from autoroute import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map CLI flags onto RouterConfig fields; unset flags keep file values."""
    overrides: dict[str, Any] = {}
    if args.dir is not None:
        overrides["dir"] = args.dir
    if args.prefix:
        overrides["prefix"] = tuple(args.prefix)
    if args.require_auth:
        overrides["default_requires_auth"] = True
    if args.force_public:
        overrides["force_public"] = tuple(args.force_public)
    if args.force_protected:
        overrides["force_protected"] = tuple(args.force_protected)
    if args.no_strict:
        overrides["strict"] = False
    if args.quiet:
        overrides["logging"] = False
    return overrides


def format_route_table(registry: RouteRegistry) -> str:
    """Render METHOD / PATH / AUTH columns for every registered route."""
    records = registry.all
    if not records:
        return "No routes registered."

    max_method = max(6, *(len(r.method) for r in records))
    max_path = max(4, *(len(r.path) for r in records))
    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"

    lines = [fmt.format("METHOD", "PATH", "AUTH")]
    lines.append("-" * min(max_method + max_path + 13, 80))
    for record in records:
        auth = "protected" if record.requires_auth else "public"
        lines.append(fmt.format(record.method, record.path, auth))
    return "\n".join(lines)


def run_routes(args: argparse.Namespace) -> None:
    """Discover routes for ``args.root`` and print the table."""
    from autoroute._errors import ConfigError
    from autoroute.config_loader import load_configs
    from autoroute.hosts import RecordingHost
    from autoroute.router import register_routes

    try:
        configs = load_configs(Path(args.root), **_overrides(args))
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = RecordingHost()
    registry = asyncio.run(register_routes(host, configs))
    print(format_route_table(registry))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        run_routes(args)


if __name__ == "__main__":
    main()
