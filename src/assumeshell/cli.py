import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from assumeshell import __version__
from assumeshell.auth import assume_role
from assumeshell.catalog import build_catalog, load_config
from assumeshell.environment import apply, plan
from assumeshell.errors import AssumeShellError, SelectionCancelled
from assumeshell.formatter import make_console, print_active, print_profiles
from assumeshell.resolver import (
    ClearIntent,
    ExplicitProfileIntent,
    InteractiveIntent,
    RegionOnlyIntent,
    resolve,
)
from assumeshell.selector import make_selector
from assumeshell.shell import run_shell, terminate_launcher
from assumeshell.utils import default_config_path

logger = logging.getLogger("assumeshell")

# botocore is chatty at DEBUG; keep it quiet even with -v
_NOISY_LOGGERS = ("botocore", "boto3", "urllib3")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assumeshell",
        description="Switch AWS profile/region and start a new shell, assuming the profile's role if it has one",
        epilog=(
            "examples:\n"
            "  assumeshell                 pick a profile interactively\n"
            "  assumeshell -p dev          use profile 'dev'\n"
            "  assumeshell -p dev -a false use 'dev' without assuming its role\n"
            "  assumeshell -r              pick a region interactively\n"
            "  assumeshell -r eu-west-1    set only the region\n"
            "  assumeshell -x              clear AWS_PROFILE and AWS_DEFAULT_REGION\n"
            "\n"
            "meant to replace the calling shell, e.g. alias aws-switch='exec assumeshell'"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"assumeshell {__version__}")

    parser.add_argument("-x", "--clear", action="store_true", help="Clear env vars related to AWS")
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        help="AWS config file (default: $AWS_CONFIG_FILE or ~/.aws/config)",
    )
    parser.add_argument("-p", "--profile", help="Specify directly the AWS profile to use")
    parser.add_argument(
        "-r", "--region",
        nargs="?",
        const="",
        default=None,
        help="Set only the region; without a value, pick one interactively",
    )
    parser.add_argument(
        "-a", "--assume",
        metavar="BOOL",
        help="If 'false', automatic role assumption is disabled (default: enabled)",
    )

    extra = parser.add_argument_group("extras")
    extra.add_argument("-l", "--list", action="store_true", help="List configured profiles and exit")
    extra.add_argument(
        "-k", "--keep-parent",
        action="store_true",
        help="Do not kill the launching shell when the new shell exits",
    )
    extra.add_argument("--no-color", action="store_true", help="Disable colored prompts and output")
    extra.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def setup_logging(verbose: bool = False) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def build_intent(args: argparse.Namespace):
    """Map flags to an intent. Precedence: clear > region > profile > interactive."""
    assume_disabled = args.assume == "false"

    if args.clear:
        return ClearIntent(assume_disabled=assume_disabled)
    if args.region is not None:
        return RegionOnlyIntent(region=args.region or None, assume_disabled=assume_disabled)
    if args.profile:
        return ExplicitProfileIntent(name=args.profile, assume_disabled=assume_disabled)
    return InteractiveIntent(assume_disabled=assume_disabled)


def run(args: argparse.Namespace, environ=os.environ, select=None, console=None) -> int:
    """Resolve, assume, apply and hand over to a new shell.

    Every failure raises before ``apply`` so a shell never starts with a
    partially updated environment.
    """
    color = not args.no_color
    select = select or make_selector(color=color)
    console = console or make_console(color=color)
    intent = build_intent(args)

    catalog = None
    if args.list or isinstance(intent, (ExplicitProfileIntent, InteractiveIntent)):
        config_path = args.config or default_config_path(environ)
        catalog = build_catalog(load_config(config_path))
        logger.debug("Catalog has %d profile(s)", len(catalog))

    if args.list:
        print_profiles(catalog, current=environ.get("AWS_PROFILE", ""), console=console)
        return 0

    resolved = resolve(intent, catalog, select, environ)
    credentials = assume_role(resolved)
    delta = plan(resolved, credentials)

    print_active(resolved, credentials, console=console)
    apply(delta, environ)

    # The shell's own exit status is not propagated
    run_shell(environ=environ)

    if not args.keep_parent:
        terminate_launcher()
    return 0


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.verbose)

    try:
        sys.exit(run(args))
    except (SelectionCancelled, KeyboardInterrupt):
        sys.exit(0)
    except AssumeShellError as e:
        print(f"[error] {e}", file=sys.stderr)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
