"""Generate GCP IAM custom role definitions from YAML specs"""

from pdum.rolegen.fetchers import ApiFetcher, GcloudFetcher, PermissionFetcher, StaticFetcher
from pdum.rolegen.pipeline import discover_specs, generate_role, generate_roles, run
from pdum.rolegen.render import render_role
from pdum.rolegen.resolver import check_role_size, compile_predicate, resolve
from pdum.rolegen.spec import load_spec, parse_spec
from pdum.rolegen.types import (
    DependencyError,
    FetchError,
    GCloudError,
    OutputError,
    ParseError,
    PatternError,
    ResolvedRole,
    RoleGenError,
    RoleSizeError,
    RoleSpec,
)

__version__ = "0.1.0-alpha"


__all__ = [
    "__version__",
    "check_role_size",
    "compile_predicate",
    "discover_specs",
    "generate_role",
    "generate_roles",
    "load_spec",
    "parse_spec",
    "render_role",
    "resolve",
    "run",
    "ApiFetcher",
    "GcloudFetcher",
    "PermissionFetcher",
    "StaticFetcher",
    "DependencyError",
    "FetchError",
    "GCloudError",
    "OutputError",
    "ParseError",
    "PatternError",
    "ResolvedRole",
    "RoleGenError",
    "RoleSizeError",
    "RoleSpec",
]
