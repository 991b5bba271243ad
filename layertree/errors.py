"""Error types raised by the layer-tree core."""

from __future__ import annotations


class LayerNotFoundError(LookupError):
    """A layer or root id was referenced where its existence was assumed.

    This always signals a caller contract violation (stale or foreign id),
    never an expected absence.
    """

    def __init__(self, layer_id: str, message: str | None = None) -> None:
        self.layer_id = layer_id
        super().__init__(message or f"layer not found: {layer_id!r}")


__all__ = ["LayerNotFoundError"]
