"""Per-message orchestration."""

from .runtime import ConciergeResult, ConciergeRuntime

__all__ = ["ConciergeResult", "ConciergeRuntime"]
