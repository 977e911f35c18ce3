"""BaseService — foundation for fixturectl services.

Every service receives a :class:`FixtureEnvironment` at construction
time. The environment provides the backend engine, the fixture registry
and the plugin hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fixturectl.infrastructure.environment import FixtureEnvironment

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, env: FixtureEnvironment) -> None:
        self._env = env

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call plugin hook *hook_name* with *payload*.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        try:
            getattr(self._env.plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
