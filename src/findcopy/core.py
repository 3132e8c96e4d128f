"""
Core logic for findcopy package.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pathspec
from colorama import Fore, Style

# Exceptions
class FindcopyError(Exception): ...
class FileListError(FindcopyError): ...
class SourceDirError(FindcopyError): ...
class TargetDirError(FindcopyError): ...
class ConfigFileError(FindcopyError): ...
class CopyError(FindcopyError): ...


PREFIX = "[findcopy]"


@dataclass
class MatchResult:
    name: str
    paths: List[Path] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.paths)


@dataclass
class CopySummary:
    requested: int = 0
    matched: int = 0
    missing: int = 0
    copied: int = 0
    duplicates: int = 0
    dry_run: bool = True


# Output helpers
def _warn(msg: str) -> None:
    print(Fore.YELLOW + f"{PREFIX} {msg}" + Style.RESET_ALL)


def _info(msg: str) -> None:
    print(f"{PREFIX} {msg}")


# File list
def _read_lines(path: Path, label: str, error: type) -> List[str]:
    """Stripped lines of *path*, minus blanks and ``#`` comments.

    Failures are raised as *error*, with *label* naming the file.
    """
    if not path.exists():
        raise error(f"{label} '{path}' does not exist")
    if not path.is_file():
        raise error(f"{label} '{path}' is not a file")
    try:
        with path.open("r", encoding="utf-8") as fh:
            stripped = [ln.strip() for ln in fh]
    except (OSError, UnicodeDecodeError) as e:
        raise error(f"Could not read {label.lower()} '{path}': {e}")
    return [ln for ln in stripped if ln and not ln.startswith("#")]


def read_file_list(path: Path) -> List[str]:
    """Return the file names listed in *path*, in order, without repeats."""
    names: List[str] = []
    seen = set()
    for ln in _read_lines(path, "File list", FileListError):
        if ln in seen:
            continue
        seen.add(ln)
        names.append(ln)
    return names


def load_exclude_patterns(config_path: Path) -> "pathspec.PathSpec":
    lines = _read_lines(config_path, "Config file", ConfigFileError)
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


# Source scanning
def _is_within(path: Path, directory: Path) -> bool:
    return path == directory or directory in path.parents


def scan_source(
    root: Path,
    exclude_spec: Optional["pathspec.PathSpec"] = None,
    skip_dir: Optional[Path] = None,
    verbose: bool = False,
) -> Dict[str, List[Path]]:
    """Index every file under *root* by its base name.

    Paths matched by *exclude_spec* (relative to *root*) and anything inside
    *skip_dir* are left out. Each name maps to its paths in sorted order.
    """
    try:
        root = root.resolve()
    except (OSError, RuntimeError) as e:
        raise SourceDirError(f"Could not resolve source path '{root}': {e}")
    if not root.exists():
        raise SourceDirError(f"Source path '{root}' does not exist")
    if not root.is_dir():
        raise SourceDirError(f"Source path '{root}' is not a directory")

    _info(f"Reading files from: {root}")
    try:
        paths = sorted(p for p in root.rglob("*") if p.is_file())
    except (OSError, PermissionError) as e:
        raise SourceDirError(f"Could not scan directory '{root}': {e}")

    index: Dict[str, List[Path]] = {}
    for p in paths:
        if skip_dir is not None and _is_within(p, skip_dir):
            continue
        rel = p.relative_to(root).as_posix()
        if exclude_spec and exclude_spec.match_file(rel):
            continue
        if verbose:
            _info(f"Inserting: `{p.name}`")
        index.setdefault(p.name, []).append(p)
    return index


def match_files(names: Iterable[str], index: Dict[str, List[Path]]) -> List[MatchResult]:
    return [MatchResult(name, list(index.get(name, []))) for name in names]


# Target handling
def prepare_target(target: Path, dry_run: bool = True) -> Path:
    try:
        target = target.resolve()
    except (OSError, RuntimeError) as e:
        raise TargetDirError(f"Could not resolve target path '{target}': {e}")

    if target.exists():
        if not target.is_dir():
            raise TargetDirError(f"Target path '{target}' is not a directory")
        return target
    if dry_run:
        _info(f"DRY RUN. Target path `{target}` would be created")
        return target
    try:
        target.mkdir(parents=True, exist_ok=True)
    except (OSError, PermissionError) as e:
        raise TargetDirError(f"Could not create directory '{target}': {e}")
    return target


def copy_matches(
    matches: List[MatchResult],
    target: Path,
    dry_run: bool = True,
) -> CopySummary:
    summary = CopySummary(requested=len(matches), dry_run=dry_run)

    # copy2 would nest the file inside an existing directory of the same name
    for m in matches:
        dst = target / m.name
        if m.found and dst.is_dir():
            raise CopyError(f"Cannot copy '{m.paths[0]}': '{dst}' is a directory")

    for m in matches:
        if not m.found:
            summary.missing += 1
            _warn(f"Not found: `{m.name}`")
            continue

        summary.matched += 1
        src, *others = m.paths
        for dup in others:
            summary.duplicates += 1
            _warn(f"Duplicate name, skipping `{dup}` (already using `{src}`)")

        dst = target / m.name
        if dry_run:
            print(f"DRY RUN. Not copying `{src}` to `{dst}`")
        else:
            print(f"Copying `{src}` to `{dst}`")
            try:
                shutil.copy2(src, dst)
            except (OSError, shutil.Error) as e:
                raise CopyError(f"Could not copy '{src}' to '{dst}': {e}")
        summary.copied += 1

    return summary


# Pipeline
def run(
    file_list: Path,
    source_dir: Path,
    target_dir: Path,
    dry_run: bool = True,
    exclude_config: Optional[Path] = None,
    verbose: bool = False,
) -> CopySummary:
    """Find every name in *file_list* under *source_dir* and copy it to *target_dir*.

    All inputs are validated before anything is written.
    """
    names = read_file_list(file_list)
    if verbose:
        _info(f"{len(names)} names read from {file_list}")

    exclude_spec = None
    if exclude_config is not None:
        exclude_spec = load_exclude_patterns(exclude_config)
        if verbose:
            _info(f"Loaded exclude patterns from {exclude_config}")

    try:
        target = target_dir.resolve()
    except (OSError, RuntimeError) as e:
        raise TargetDirError(f"Could not resolve target path '{target_dir}': {e}")

    try:
        source = source_dir.resolve()
    except (OSError, RuntimeError) as e:
        raise SourceDirError(f"Could not resolve source path '{source_dir}': {e}")
    if _is_within(source, target):
        raise TargetDirError(
            f"Target path '{target}' must not be the source directory or contain it"
        )

    index = scan_source(source_dir, exclude_spec, skip_dir=target, verbose=verbose)
    matches = match_files(names, index)

    target = prepare_target(target, dry_run=dry_run)
    summary = copy_matches(matches, target, dry_run=dry_run)

    verb = "would be copied" if dry_run else "copied"
    msg = (
        f"{PREFIX} Done. {summary.copied} of {summary.requested} files {verb}, "
        f"{summary.missing} not found, {summary.duplicates} duplicates skipped."
    )
    print(Fore.GREEN + msg + Style.RESET_ALL)
    if dry_run:
        _info("Dry run only. Use --disable-dry-run to copy files for real.")
    return summary

