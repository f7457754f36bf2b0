"""CLI application entry point and command routing for crate-edit.

This module is the **sole error boundary** for the entire application.
It catches :class:`~crate_edit.exceptions.CrateEditError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, renders the
message and its cause chain on stderr, and returns well-defined exit
codes.

The same entry point serves three executables:

* ``crate-edit add|rm ...``
* ``cargo-add``: cargo runs ``cargo-add add ...`` for ``cargo add ...``
* ``cargo-rm``: cargo runs ``cargo-rm rm ...`` for ``cargo rm ...``

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core
  services and infrastructure adapters.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from crate_edit.cli import exit_codes
from crate_edit.cli.console import console
from crate_edit.config import Settings
from crate_edit.core.models import AddDepKind, RemoveDepKind
from crate_edit.exceptions import CrateEditError
from crate_edit.utils.logging_utils import configure_logging
from crate_edit.version import __version__

ADD_ABOUT = """\
Add a dependency to a Cargo.toml manifest file. If <crate> is a GitHub
or GitLab repository URL, or a local path, the crate name is read from
that crate's own manifest and --git or --path is set accordingly."""

ADD_AFTER_HELP = """\
Please note that Cargo treats versions like "1.2.3" as "^1.2.3" (and that
"^1.2.3" is specified as ">=1.2.3 and <2.0.0"). By default, `add` uses this
format, as it is the one that the crates.io registry suggests. One goal of
`add` is to prevent you from using wildcard dependencies (version "*")."""

UPGRADE_HELP = (
    "Choose a method of semantic version upgrades. The modifiers for the "
    "various methods are '=' (none) which is an exact match, '~' (patch), "
    "'^' (minor) and '>=' (all). Default: minor."
)

UPGRADE_CHOICES: tuple[str, ...] = ("none", "patch", "minor", "all")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_add_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "add",
        help="Add dependencies to a Cargo.toml manifest file.",
        description=ADD_ABOUT,
        epilog=ADD_AFTER_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("crates", nargs="+", metavar="crate", help="The crate(s) to add.")

    kind = parser.add_mutually_exclusive_group()
    kind.add_argument(
        "-D", "--dev", dest="kind", action="store_const", const=AddDepKind.DEV,
        help="Add crate as development dependency.",
    )
    kind.add_argument(
        "-B", "--build", dest="kind", action="store_const", const=AddDepKind.BUILD,
        help="Add crate as build dependency.",
    )
    kind.add_argument(
        "--optional", dest="kind", action="store_const", const=AddDepKind.OPTIONAL,
        help="Add as an optional dependency (for use in features). "
        "This does not work for dev or build dependencies.",
    )
    parser.set_defaults(kind=AddDepKind.NORMAL)

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--vers", metavar="VER",
        help="Specify the version to grab from the registry (crates.io). You can "
        "also specify versions as part of the name, e.g. `add bitflags@0.3.2`.",
    )
    source.add_argument(
        "--git", metavar="URI", help="Specify a git repository to download the crate from.",
    )
    source.add_argument(
        "--path", metavar="PATH", help="Specify the path the crate should be loaded from.",
    )

    parser.add_argument(
        "--target", metavar="TARGET",
        help="Add as dependency to the given target platform. "
        "This does not work for dev or build dependencies.",
    )
    parser.add_argument(
        "--manifest-path", metavar="PATH",
        help="Path to the manifest to add a dependency to.",
    )
    parser.add_argument(
        "--upgrade", metavar="METHOD", type=str.lower, choices=UPGRADE_CHOICES,
        default="minor", help=UPGRADE_HELP,
    )
    parser.add_argument(
        "--allow-prerelease", action="store_true",
        help='Include prerelease versions when fetching from crates.io (e.g. "0.6.0-alpha").',
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Do not print any output in case of success.",
    )


def _add_rm_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "rm",
        help="Remove a dependency from a Cargo.toml manifest file.",
        description="Remove a dependency from a Cargo.toml manifest file.",
    )
    parser.add_argument("crate", help="The crate to remove.")

    kind = parser.add_mutually_exclusive_group()
    kind.add_argument(
        "-D", "--dev", dest="kind", action="store_const", const=RemoveDepKind.DEV,
        help="Remove crate as development dependency.",
    )
    kind.add_argument(
        "-B", "--build", dest="kind", action="store_const", const=RemoveDepKind.BUILD,
        help="Remove crate as build dependency.",
    )
    parser.set_defaults(kind=RemoveDepKind.NORMAL)

    parser.add_argument(
        "--manifest-path", metavar="PATH",
        help="Path to the manifest to remove a dependency from.",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Do not print any output in case of success.",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with ``add`` and ``rm``."""
    parser = argparse.ArgumentParser(
        prog="crate-edit",
        description="Add and remove dependencies in a Cargo.toml manifest.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=None,
        help="Diagnostic log level (DEBUG, INFO, WARNING, ERROR). "
        "Overrides CRATE_EDIT_LOG_LEVEL.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    _add_add_parser(subparsers)
    _add_rm_parser(subparsers)
    return parser


# ---------------------------------------------------------------------------
# Command dispatch (no business logic)
# ---------------------------------------------------------------------------

def _handle_add(args: argparse.Namespace, settings: Settings) -> int:
    """Dispatch ``add``.

    Flow:
    1. Open the manifest (explicit path or upward search).
    2. Wire the crates.io client and source locator into the resolver.
    3. Let :class:`AddService` resolve, insert and write.
    """
    from crate_edit.cli.messages import report_added
    from crate_edit.core.add_service import AddService
    from crate_edit.core.dependency_resolver import DependencyResolver
    from crate_edit.core.models import AddRequest
    from crate_edit.core.upgrade_policy import parse_upgrade_mode
    from crate_edit.infra.crates_io import CratesIoClient
    from crate_edit.infra.manifest import CargoManifest
    from crate_edit.infra.source_locator import CargoSourceLocator

    request = AddRequest(
        crates=tuple(args.crates),
        kind=args.kind,
        version=args.vers,
        git=args.git,
        path=args.path,
        target=args.target,
        upgrade=parse_upgrade_mode(args.upgrade),
        allow_prerelease=args.allow_prerelease,
    )

    manifest = CargoManifest.open(args.manifest_path)
    resolver = DependencyResolver(CratesIoClient(settings), CargoSourceLocator(settings))
    service = AddService(manifest, resolver)
    service.add(request, progress_callback=None if args.quiet else report_added)
    return exit_codes.SUCCESS


def _handle_rm(args: argparse.Namespace) -> int:
    """Dispatch ``rm``."""
    from crate_edit.cli.messages import report_removed
    from crate_edit.core.remove_service import RemoveService
    from crate_edit.infra.manifest import CargoManifest

    manifest = CargoManifest.open(args.manifest_path)
    service = RemoveService(manifest)
    service.remove(
        args.crate,
        args.kind,
        progress_callback=None if args.quiet else report_removed,
    )
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the crate-edit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "add":
        return _handle_add(args, settings)

    return _handle_rm(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry points.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    from crate_edit.cli.messages import report_error, report_unexpected

    try:
        code = main()
        sys.exit(code)
    except CrateEditError as exc:
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\nAborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        report_unexpected(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
