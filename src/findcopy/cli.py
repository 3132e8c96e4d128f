"""
CLI entrypoint for findcopy package.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, colorama_text

from . import __version__
from .core import FindcopyError, run


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="findcopy",
        description="Copy files named in a list from a source tree to a target directory.",
        epilog="Dry run is the default. Pass --disable-dry-run to copy files for real.",
    )
    p.add_argument(
        "-f",
        "--file-list",
        type=Path,
        required=True,
        help="Path to a file containing a list of file names to copy",
    )
    p.add_argument(
        "-s",
        "--source-dir",
        type=Path,
        required=True,
        help="Directory where the files are located (searched recursively)",
    )
    p.add_argument(
        "-t",
        "--target-dir",
        type=Path,
        required=True,
        help="Directory where the files will be copied",
    )
    p.add_argument(
        "-d",
        "--disable-dry-run",
        action="store_true",
        help="Disable dry run mode, copy files for real",
    )
    p.add_argument(
        "--exclude-config",
        type=Path,
        help="Path to a file with ignore patterns for the source tree (one per line)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def _error(msg: str) -> None:
    print(Fore.RED + msg + Style.RESET_ALL, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    with colorama_text():
        try:
            ns = _parse_args(argv)
            run(
                ns.file_list,
                ns.source_dir,
                ns.target_dir,
                dry_run=not ns.disable_dry_run,
                exclude_config=ns.exclude_config,
                verbose=ns.verbose,
            )
        except FindcopyError as e:
            _error(f"Error: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            print("\nCancelled.", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            _error(f"Unexpected error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
