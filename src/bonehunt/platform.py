# src/bonehunt/platform.py
# Host-platform collaborators: who is playing, and the fire-and-forget
# celebration hook. Neither one can influence game state.

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from .config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

class IdentityProvider(Protocol):
    def get_display_name(self) -> Optional[str]: ...


class Celebration(Protocol):
    def celebrate(self, reason: str) -> None: ...


class StaticIdentity:
    def __init__(self, name: Optional[str]) -> None:
        self.name = name

    def get_display_name(self) -> Optional[str]:
        return self.name


class NullCelebration:
    def celebrate(self, reason: str) -> None:
        return None


class RecordingCelebration:
    """Keeps every reason it was asked to celebrate (used by tests and the runner log)."""

    def __init__(self) -> None:
        self.reasons: List[str] = []

    def celebrate(self, reason: str) -> None:
        self.reasons.append(reason)
        logger.info("Celebrating: %s", reason)


def resolve_display_name(provider: Optional[IdentityProvider], default: str = DEFAULT_CONFIG.default_display_name) -> str:
    if provider is None:
        return default
    try:
        name = provider.get_display_name()
    except Exception:
        logger.warning("Identity lookup failed; using %r", default, exc_info=True)
        return default
    if not name or not str(name).strip():
        return default
    return str(name).strip()
