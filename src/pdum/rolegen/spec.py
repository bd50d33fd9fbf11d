"""Parse role spec YAML files into RoleSpec objects.

A spec looks like::

    name: foo.bar
    title: Foo Barrer
    description: Allows doing Bar on Foo resources
    include:
      permissions:
      - foo.bar.doSomething
      roles:
      - roles/foo.bar
      permissionRegexes:
      - ^foo.bar.(get|list)
    exclude:
      permissionRegexes:
      - SuperDangerousOperation$
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Optional

import yaml
from rich.console import Console
from rich.markup import escape

from pdum.rolegen.types import ROLE_NAME_PATTERN, ParseError, RoleSpec

REQUIRED_FIELDS = ("name", "title", "description")
TOP_LEVEL_FIELDS = frozenset(REQUIRED_FIELDS + ("include", "exclude"))
INCLUDE_FIELDS = frozenset({"permissions", "roles", "permissionRegexes"})
EXCLUDE_FIELDS = frozenset({"permissionRegexes"})

console = Console()


def _warn_unknown(keys, known: frozenset, where: str, source: Optional[Path]) -> None:
    for key in sorted(str(k) for k in keys if k not in known):
        console.print(
            f"[yellow]Warning:[/yellow] ignoring unknown field {escape(where + key)} "
            f"in {escape(str(source or '<spec>'))}"
        )


def _string_list(block: dict, key: str, where: str, problems: list[str]) -> tuple[str, ...]:
    value = block.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        problems.append(f"{where}{key} must be a list of strings")
        return ()
    return tuple(value)


def _scalar_text(value: object) -> Optional[str]:
    """Render a YAML scalar the way `yq -r` prints it, or None for non-scalars."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return None


def _block(data: dict, key: str, problems: list[str]) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        problems.append(f"{key} must be a mapping")
        return {}
    return value


def parse_spec(text: str, source: Optional[Path] = None) -> RoleSpec:
    """Parse the YAML text of a role spec.

    Args:
        text: Contents of the spec file
        source: Path the text was read from, for error messages

    Returns:
        The parsed RoleSpec

    Raises:
        ParseError: Listing every missing or malformed field
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(source, [f"invalid YAML: {e}"]) from e

    if not isinstance(data, dict):
        raise ParseError(source, ["spec must be a YAML mapping"])

    problems: list[str] = []
    fields: dict[str, str] = {}
    for key in REQUIRED_FIELDS:
        value = data.get(key)
        if value is None:
            problems.append(f"missing required field {key}")
        elif _scalar_text(value) is None:
            problems.append(f"{key} must be a string")
        else:
            fields[key] = _scalar_text(value)

    name = fields.get("name")
    if name is not None and not ROLE_NAME_PATTERN.match(name):
        problems.append(
            f"name {name!r} must be 3-64 characters of letters, digits, underscores or periods"
        )

    include = _block(data, "include", problems)
    exclude = _block(data, "exclude", problems)
    include_permissions = _string_list(include, "permissions", "include.", problems)
    include_roles = _string_list(include, "roles", "include.", problems)
    include_regexes = _string_list(include, "permissionRegexes", "include.", problems)
    exclude_regexes = _string_list(exclude, "permissionRegexes", "exclude.", problems)

    if problems:
        raise ParseError(source, problems)

    _warn_unknown(data, TOP_LEVEL_FIELDS, "", source)
    _warn_unknown(include, INCLUDE_FIELDS, "include.", source)
    _warn_unknown(exclude, EXCLUDE_FIELDS, "exclude.", source)

    return RoleSpec(
        name=fields["name"],
        title=fields["title"],
        description=fields["description"],
        include_permissions=include_permissions,
        include_roles=include_roles,
        include_regexes=include_regexes,
        exclude_regexes=exclude_regexes,
        source=source,
        text=text,
    )


def load_spec(path: Path) -> RoleSpec:
    """Read and parse the role spec at ``path``.

    Raises:
        ParseError: If the file cannot be read or is not a valid spec
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(path, [f"cannot read file: {e}"]) from e
    return parse_spec(text, source=path)
