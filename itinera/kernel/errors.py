"""
Itinera Kernel — Errors

One taxonomy shared by the converter, the loader and the session.

Repair never raises. The streaming session turns parse and layout errors into
placeholder state; the synchronous converter raises them. Block render errors
never propagate past the dispatcher.
"""

from __future__ import annotations


class ItineraError(Exception):
    """Base class for every error raised by the kernel."""


class InvalidArgumentsError(ItineraError, ValueError):
    """Missing JSON text or a layout without blocks."""


class LayoutError(ItineraError, ValueError):
    """A layout definition violates its invariants (e.g. duplicate block ids)."""


class ParseError(ItineraError):
    """Repaired text is still not valid JSON."""


# ---------------------------------------------------------------------------
# Layout resolution
# ---------------------------------------------------------------------------


class LayoutResolutionError(ItineraError):
    """No layout could be resolved for a payload."""

    def __init__(self, message: str, type_name: str | None = None) -> None:
        super().__init__(message)
        self.type_name = type_name


class MissingTypeError(LayoutResolutionError):
    """Payload has no `type` field (or is not a JSON object)."""


class NoLayoutConfigured(LayoutResolutionError):
    """The type→module table has no entry for this type."""


class LayoutLoadFailed(LayoutResolutionError):
    """The template module could not be imported or exports no `layout`."""


class LayoutNotFound(LayoutResolutionError):
    """The module loaded but the registry still has no layout for the type."""


# ---------------------------------------------------------------------------
# Block rendering
# ---------------------------------------------------------------------------


class BlockRenderError(ItineraError):
    """A single block's renderer failed. Caught by the dispatcher."""

    def __init__(self, block_id: str, cause: BaseException) -> None:
        super().__init__(f"Error rendering block '{block_id}': {cause}")
        self.block_id = block_id
        self.cause = cause
