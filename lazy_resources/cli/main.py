"""Command-line interface for lazy-resources.

This module provides a CLI for inspecting resource catalogs and checking
how members resolve without writing code.

Commands:
    catalog: List every resource visible to an accessor
    read: Resolve a member name and print its value
    match: Check whether a resource name matches a member name

Example:
    $ lazy-resources catalog --package myapp.texts
    $ lazy-resources read Greeting --directory ./templates
    $ lazy-resources match myapp.texts.Greeting.txt Greeting
"""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from lazy_resources.config import load_settings
from lazy_resources.discovery.catalog import ResourceCatalog
from lazy_resources.exceptions import LazyResourcesError
from lazy_resources.models import MemberDescriptor, ReaderSettings
from lazy_resources.resources.predicates import default_predicate
from lazy_resources.runtime.builder import ResourceBuilder


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--package",
        action="append",
        default=[],
        help="Package to search for resources (can be specified multiple times)",
    )
    parser.add_argument(
        "--directory",
        type=Path,
        action="append",
        default=[],
        help="Directory to search for resources (can be specified multiple times)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML settings file (optional)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="lazy-resources",
        description="Command-line interface for lazy-resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    catalog_parser = subparsers.add_parser(
        "catalog",
        help="List catalog entries",
        description="Display every resource found in the configured containers",
    )
    _add_source_arguments(catalog_parser)

    read_parser = subparsers.add_parser(
        "read",
        help="Resolve a member and print its value",
        description="Build an accessor with a single member and read it",
    )
    read_parser.add_argument("member", help="Member name to resolve")
    _add_source_arguments(read_parser)

    match_parser = subparsers.add_parser(
        "match",
        help="Evaluate the default predicate",
        description="Check whether a resource name matches a member name",
    )
    match_parser.add_argument("resource", help="Dot-qualified resource name")
    match_parser.add_argument("member", help="Member name")

    return parser


def _create_builder(args: argparse.Namespace) -> ResourceBuilder:
    settings = load_settings(args.config) if args.config else ReaderSettings()
    settings.packages.extend(args.package)
    settings.directories.extend(str(d) for d in args.directory)
    return ResourceBuilder.from_settings(settings)


def cmd_catalog(args: argparse.Namespace) -> int:
    """Execute the catalog command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        configuration = _create_builder(args).configuration()
        catalog = ResourceCatalog.from_containers(configuration.containers)

        if not len(catalog):
            print("No resources found.")
            return 0

        print(f"Found {len(catalog)} resource(s):\n")
        for entry in catalog:
            print(f"  {entry.container.name}\t{entry.name}")

        return 0

    except LazyResourcesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def cmd_read(args: argparse.Namespace) -> int:
    """Execute the read command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        accessor = _create_builder(args).build({args.member: str}, name="Cli")
        print(getattr(accessor, args.member))
        return 0

    except LazyResourcesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def cmd_match(args: argparse.Namespace) -> int:
    """Execute the match command.

    Returns:
        0 if the resource matches the member, 1 otherwise
    """
    if default_predicate(args.resource, MemberDescriptor(args.member)):
        print(f"'{args.resource}' matches '{args.member}'")
        return 0

    print(f"'{args.resource}' does not match '{args.member}'")
    return 1


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the lazy-resources command is executed.
    It parses command-line arguments and dispatches to the appropriate
    command handler.
    """
    parser = create_parser()
    args = parser.parse_args()

    if args.command == "catalog":
        exit_code = cmd_catalog(args)
    elif args.command == "read":
        exit_code = cmd_read(args)
    elif args.command == "match":
        exit_code = cmd_match(args)
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
