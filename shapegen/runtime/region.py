"""Regions and endpoint resolution for generated clients."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class Region:
    """A service region, optionally pinned to a custom endpoint.

    Args:
        name: Region name, e.g. ``eu-west-1``.
        endpoint: Base URL used instead of the derived one (local stacks,
            proxies, tests).
    """

    name: str
    endpoint: Optional[str] = None

    def endpoint_url(self, endpoint_prefix: str) -> str:
        if self.endpoint:
            return self.endpoint.rstrip("/")
        suffix = "amazonaws.com.cn" if self.name.startswith("cn-") else "amazonaws.com"
        return f"https://{endpoint_prefix}.{self.name}.{suffix}"

    def __str__(self) -> str:
        return self.name


def default_region() -> Region:
    """Region from ``AWS_DEFAULT_REGION``/``AWS_REGION``, else us-east-1."""
    name = os.environ.get("AWS_DEFAULT_REGION") or os.environ.get("AWS_REGION")
    return Region(name or DEFAULT_REGION)
