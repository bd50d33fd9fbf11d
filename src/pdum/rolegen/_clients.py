"""Internal helpers to construct Google API service clients.

These helpers centralize `googleapiclient.discovery.build` usage to keep
options consistent across the codebase.
"""

from __future__ import annotations

from google.auth.credentials import Credentials
from googleapiclient import discovery


def iam_v1(credentials: Credentials):
    """IAM v1 service client."""
    return discovery.build("iam", "v1", credentials=credentials, cache_discovery=False)
