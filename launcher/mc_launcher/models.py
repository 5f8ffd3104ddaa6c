from __future__ import annotations
from typing import Dict
from pydantic import BaseModel, Field, field_validator


class CatalogFile(BaseModel):
    """
    On-disk version catalog, e.g. ``<MC_ROOT>/versions.json``::

        {"versions": {"1.21.4": "https://.../paper-1.21.4-232.jar"}}

    Entries extend or override the built-in versions.
    """
    versions: Dict[str, str] = Field(default_factory=dict)

    @field_validator("versions")
    @classmethod
    def _urls_are_http(cls, value: Dict[str, str]) -> Dict[str, str]:
        for version, url in value.items():
            if not version.strip():
                raise ValueError("version keys must not be empty")
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"download url for {version!r} must be http(s): {url!r}")
        return value
