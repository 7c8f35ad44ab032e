#!/usr/bin/env python3
"""
CLI tool for querying the event schema service.

Usage:
    python -m schema_svc.cli class process_activity --objects
    python -m schema_svc.cli object user --profiles host
    python -m schema_svc.cli category system
    python -m schema_svc.cli classes --extensions dev
    python -m schema_svc.cli version
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx
from colorama import Fore, Style, init as colorama_init


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Apply color when enabled."""
    if enabled:
        return f"{color}{text}{Style.RESET_ALL}"
    return text


def format_name(name: str, enabled: bool = True) -> str:
    """Format a possibly extension-scoped name (`ext/name`) for display."""
    if "/" in name:
        extension, base = name.split("/", 1)
        return colorize(extension + "/", Fore.MAGENTA, enabled) + colorize(base, Fore.YELLOW, enabled)
    return colorize(name, Fore.YELLOW, enabled)


def print_json(data: Any, indent: int = 2) -> None:
    output = json.dumps(data, indent=indent, default=str)
    print(output)


def print_attributes(attributes: dict, enabled: bool = True, indent: str = "  ") -> None:
    """Pretty print an attribute mapping, one line per attribute."""
    print(f"\n{colorize('Attributes:', Style.BRIGHT, enabled)}")

    if not attributes:
        print(f"{indent}{colorize('(none)', Style.DIM, enabled)}")
        return

    for name, attr in attributes.items():
        type_str = attr.get("type", "")
        if attr.get("object_type"):
            type_str = f"{type_str} -> {attr['object_type']}"
        if attr.get("is_array"):
            type_str += "[]"

        line = f"{indent}{colorize(name, Fore.CYAN, enabled)}: {type_str}"
        if attr.get("requirement"):
            line += f" {colorize('(' + attr['requirement'] + ')', Style.DIM, enabled)}"
        if attr.get("profile"):
            line += f" {colorize('[' + attr['profile'] + ']', Fore.GREEN, enabled)}"
        print(line)


def print_entry(data: dict, enabled: bool = True) -> None:
    """Pretty print a class or object view."""
    print(colorize("\nName:", Style.BRIGHT, enabled), format_name(data.get("name", ""), enabled))

    if data.get("caption"):
        print(colorize("Caption:", Style.BRIGHT, enabled), data["caption"])
    if data.get("uid") is not None:
        print(colorize("UID:", Style.BRIGHT, enabled), data["uid"])
    if data.get("category"):
        print(colorize("Category:", Style.BRIGHT, enabled), data["category"])
    if data.get("description"):
        print(colorize("Description:", Style.BRIGHT, enabled), data["description"])

    print_attributes(data.get("attributes", {}), enabled)

    objects = data.get("objects")
    if objects:
        print(colorize("\nReferenced objects:", Style.BRIGHT, enabled))
        for name in objects:
            print(f"  {colorize('•', Fore.CYAN, enabled)} {format_name(name, enabled)}")


def _params(args) -> dict[str, str]:
    """Build query parameters from common options."""
    params: dict[str, str] = {}
    if getattr(args, "extension", None):
        params["extension"] = args.extension
    if getattr(args, "extensions", None):
        params["extensions"] = args.extensions
    if getattr(args, "profiles", None) is not None:
        params["profiles"] = args.profiles
    if getattr(args, "objects", False):
        params["objects"] = "1"
    return params


async def _get(args, path: str) -> httpx.Response:
    async with httpx.AsyncClient(base_url=args.base_url) as client:
        return await client.get(path, params=_params(args))


def _error(response: httpx.Response, enabled: bool) -> int:
    print(colorize(f"Error: {response.status_code}", Fore.RED, enabled), file=sys.stderr)
    print(response.text, file=sys.stderr)
    return 1


async def cmd_entry(args, kind: str) -> int:
    """Show a single class or object."""
    response = await _get(args, f"/api/{kind}/{args.name}")
    if response.status_code != 200:
        return _error(response, args.color)

    data = response.json()
    if args.json:
        print_json(data)
    else:
        print_entry(data, args.color)
    return 0


async def cmd_category(args) -> int:
    """Show a category and its classes."""
    response = await _get(args, f"/api/categories/{args.name}")
    if response.status_code != 200:
        return _error(response, args.color)

    data = response.json()
    if args.json:
        print_json(data)
        return 0

    print(colorize("\nCategory:", Style.BRIGHT, args.color), format_name(data.get("name", args.name), args.color))
    if data.get("caption"):
        print(colorize("Caption:", Style.BRIGHT, args.color), data["caption"])

    print(colorize("\nClasses:", Style.BRIGHT, args.color))
    for name, cls in data.get("classes", {}).items():
        print(f"  {colorize('•', Fore.CYAN, args.color)} {format_name(name, args.color)} {cls.get('caption', '')}")
    if not data.get("classes"):
        print(colorize("  (none)", Style.DIM, args.color))
    return 0


async def cmd_list(args, kind: str) -> int:
    """List class or object summaries."""
    response = await _get(args, f"/api/{kind}")
    if response.status_code != 200:
        return _error(response, args.color)

    data = response.json()
    if args.json:
        print_json(data)
        return 0

    print(colorize(f"\n{kind.capitalize()}:", Style.BRIGHT, args.color))
    for entry in data:
        print(f"  {format_name(entry.get('name', ''), args.color)}  {entry.get('caption', '')}")
    return 0


async def cmd_version(args) -> int:
    response = await _get(args, "/api/version")
    if response.status_code != 200:
        return _error(response, args.color)
    print(response.json().get("version", "unknown"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CLI tool for the Event Schema Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--base-url",
        default="http://localhost:8080",
        help="Base URL of the schema service",
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    parser.add_argument("--no-color", dest="color", action="store_false", help="Disable colors")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for kind in ("class", "object"):
        entry_parser = subparsers.add_parser(kind, help=f"Show a single {kind}")
        entry_parser.add_argument("name", help=f"{kind.capitalize()} name")
        entry_parser.add_argument("--extension", help="Extension that defines it")
        entry_parser.add_argument("--objects", action="store_true", help="Expand referenced objects")
        entry_parser.add_argument("--profiles", help="Comma list of active profiles ('' for none)")

    cat_parser = subparsers.add_parser("category", help="Show a category and its classes")
    cat_parser.add_argument("name", help="Category name")
    cat_parser.add_argument("--extension", help="Extension that defines it")
    cat_parser.add_argument("--extensions", help="Comma list of visible extensions")

    for kind in ("classes", "objects"):
        list_parser = subparsers.add_parser(kind, help=f"List {kind}")
        list_parser.add_argument("--extensions", help="Comma list of visible extensions")

    subparsers.add_parser("version", help="Show the schema version")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.color:
        colorama_init()

    # Run the appropriate command
    if args.command == "class":
        return asyncio.run(cmd_entry(args, "classes"))
    elif args.command == "object":
        return asyncio.run(cmd_entry(args, "objects"))
    elif args.command == "category":
        return asyncio.run(cmd_category(args))
    elif args.command in ("classes", "objects"):
        return asyncio.run(cmd_list(args, args.command))
    elif args.command == "version":
        return asyncio.run(cmd_version(args))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
