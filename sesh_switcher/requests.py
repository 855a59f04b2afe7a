"""Correlation of fire-and-forget helper requests with their results."""

from __future__ import annotations

import logging
import uuid

logger = logging.getLogger(__name__)


class AsyncRequestTable:
    """Pending request identifiers.

    An identifier is issued when a helper is opened and consumed exactly once
    when a result carrying it arrives. Results with unknown identifiers are
    dropped. Identifiers whose result never arrives simply stay pending.
    """

    def __init__(self) -> None:
        self._pending: list[str] = []

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def issue(self) -> str:
        """Create and record a fresh identifier."""
        request_id = str(uuid.uuid4())
        self._pending.append(request_id)
        logger.debug("Issued request %s (%d pending)", request_id, len(self._pending))
        return request_id

    def resolve(self, request_id: str) -> bool:
        """Consume ``request_id``.

        Returns:
            True if it was pending, False if the result should be ignored.
        """
        try:
            self._pending.remove(request_id)
        except ValueError:
            logger.warning("Dropping result for unknown request id %s", request_id)
            return False
        logger.debug("Resolved request %s (%d pending)", request_id, len(self._pending))
        return True
