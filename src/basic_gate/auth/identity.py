"""Identity record produced by a successful authentication."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Identity:
    """A verified principal.

    Attributes:
        id: URI-shaped identifier, e.g. ``urn:basic:jeff``.
        properties: Named properties, empty at creation. Later pipeline
            stages may enrich it.
    """

    id: str
    properties: dict[str, Any] = field(default_factory=dict)
