"""Helpers for writing resource identifiers into log lines."""

from __future__ import annotations

import hashlib
from typing import Any

_OCID_SCHEME = "ocid1"


def _ocid_resource_type(text: str) -> str | None:
    parts = text.split(".")
    if len(parts) >= 3 and parts[0] == _OCID_SCHEME and parts[1]:
        return parts[1]
    return None


def safe_log_identifier(value: Any, *, prefix: str | None = None) -> str:
    """Return a deterministic non-reversible token for an identifier.

    OCIDs keep their resource type as the token prefix
    (``ocid1.exportset.oc1..abc`` becomes ``exportset-<digest>``) so log
    lines stay readable without exposing tenancy-specific ids.
    """
    text = str(value or "").strip()
    label = prefix or _ocid_resource_type(text) or "id"
    if not text:
        return f"{label}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{label}-{digest}"
