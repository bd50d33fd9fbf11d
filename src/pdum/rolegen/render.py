"""Render resolved roles as gcloud-compatible YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from pdum.rolegen.types import TOOL_NAME, ResolvedRole


class _RoleDumper(yaml.SafeDumper):
    """SafeDumper that indents block sequences under their parent key."""

    def increase_indent(self, flow=False, indentless=False):  # noqa: ANN001
        return super().increase_indent(flow, False)


def comment_header(spec_text: str, spec_path: Path | str) -> str:
    """Return the spec text as a comment block crediting the generator."""
    lines = [f"#### generated by {TOOL_NAME} from {spec_path}", "#"]
    if spec_text:
        # Only newlines end a line; other separators stay inside the comment.
        body = spec_text[:-1] if spec_text.endswith("\n") else spec_text
        lines.extend(f"# {line}" for line in body.split("\n"))
    lines.append("#")
    return "\n".join(lines) + "\n"


def render_body(role: ResolvedRole) -> str:
    """Dump the role fields in alphabetical key order, like gcloud does."""
    return yaml.dump(
        role.to_dict(),
        Dumper=_RoleDumper,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
        width=float("inf"),
    )


def render_role(role: ResolvedRole, spec_text: str, spec_path: Path | str) -> str:
    """Render the full output file for ``role``.

    Args:
        role: The resolved role
        spec_text: Verbatim contents of the spec it came from
        spec_path: Path of that spec, named in the header

    Returns:
        The file contents, ending with a newline
    """
    return comment_header(spec_text, spec_path) + render_body(role)
