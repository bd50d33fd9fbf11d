"""Generate custom role files from a tree of role specs.

Spec files are processed one at a time in sorted order. The first error stops
the run; files already generated earlier in the run are kept, and the failing
spec never leaves a partial output file behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Iterable

from rich.console import Console
from rich.markup import escape

from pdum.rolegen.render import render_role
from pdum.rolegen.resolver import FetchRolePermissions, check_role_size, resolve
from pdum.rolegen.spec import load_spec
from pdum.rolegen.types import SPEC_SUFFIX, OutputError, ParseError, RoleGenError

Writer = Callable[[Path, str], None]

console = Console()


def discover_specs(paths: Iterable[Path | str]) -> list[Path]:
    """Find the spec files to process.

    Directories are searched recursively for ``*.yaml`` files, sorted by path.
    A file path is taken as is. Paths keep the order they were given in.

    Raises:
        ParseError: If a path does not exist
    """
    found: list[Path] = []
    for path in map(Path, paths):
        if path.is_dir():
            specs = (p for p in path.rglob(f"*{SPEC_SUFFIX}") if p.is_file())
            found.extend(sorted(specs, key=str))
        elif path.is_file():
            found.append(path)
        else:
            raise ParseError(path, ["no such file or directory"])
    return found


def output_path_for(role_name: str, output_dir: Path | str) -> Path:
    """Where the role called ``role_name`` is written."""
    return Path(output_dir) / f"{role_name}{SPEC_SUFFIX}"


def write_file_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` so readers see the old file or the new one."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def generate_role(
    spec_path: Path,
    fetch: FetchRolePermissions,
    output_dir: Path | str,
    writer: Writer = write_file_atomic,
) -> Path:
    """Generate the role file for a single spec.

    Args:
        spec_path: The spec to read
        fetch: Returns the permissions of a predefined role
        output_dir: Directory the role file is written to
        writer: Called with the output path and file contents

    Returns:
        The path of the generated file

    Raises:
        RoleGenError: If the spec cannot be parsed, resolved or written
    """
    try:
        spec = load_spec(spec_path)
        output_path = output_path_for(spec.name, output_dir)
        console.print(
            f"[cyan]generating custom role, spec:[/cyan] {escape(str(spec_path))}"
            f"[cyan], output:[/cyan] {escape(str(output_path))}"
        )

        role = resolve(spec, fetch)
        check_role_size(role)
        try:
            writer(output_path, render_role(role, spec.text, spec_path))
        except OSError as e:
            raise OutputError(output_path, e) from e
    except RoleGenError as e:
        if e.spec_path is None:
            e.spec_path = Path(spec_path)
        raise
    return output_path


def generate_roles(
    paths: Iterable[Path | str],
    fetch: FetchRolePermissions,
    output_dir: Path | str,
    writer: Writer = write_file_atomic,
) -> list[Path]:
    """Generate a role file for every spec under ``paths``, stopping at the first error."""
    return [generate_role(spec_path, fetch, output_dir, writer) for spec_path in discover_specs(paths)]


def run(
    paths: Iterable[Path | str],
    fetch: FetchRolePermissions,
    output_dir: Path | str,
    writer: Writer = write_file_atomic,
) -> int:
    """Generate every role under ``paths`` and report the outcome.

    Returns:
        0 if every spec was generated, 1 otherwise
    """
    try:
        outputs = generate_roles(paths, fetch, output_dir, writer)
    except RoleGenError as e:
        where = ""
        if e.spec_path is not None and str(e.spec_path) not in str(e):
            where = f"{e.spec_path}: "
        console.print(f"[bold red]Error:[/bold red] {escape(where + str(e))}")
        return 1
    console.print(f"[green]Generated {len(outputs)} custom role(s).[/green]")
    return 0
