from __future__ import annotations

import logging
from typing import Optional

from .errors import OperationCanceledError

logger = logging.getLogger("auction_house.scope")


class CancellationScope:
    """Cooperative cancellation token for one operation call.

    Work checks the scope at its own checkpoints via ``throw_if_canceled``;
    nothing is interrupted preemptively.
    """

    def __init__(self) -> None:
        self._canceled = False
        self._reason: Optional[str] = None

    @property
    def is_canceled(self) -> bool:
        return self._canceled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        if self._canceled:
            return
        self._canceled = True
        self._reason = reason
        logger.debug("scope_canceled reason=%s", reason)

    def throw_if_canceled(self) -> None:
        if self._canceled:
            raise OperationCanceledError(self._reason)
