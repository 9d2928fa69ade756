"""Routes environment completion signals to the first handler that claims them."""

from __future__ import annotations

import logging
from typing import List, Optional

from core.interfaces import ResultListener

_log = logging.getLogger(__name__)


class ResultRouter:
    def __init__(self) -> None:
        self._handlers: List[ResultListener] = []

    def add(self, handler: ResultListener) -> None:
        self._handlers.append(handler)

    def dispatch(self, request_code: int, result_code: int, uri: Optional[str]) -> bool:
        for handler in self._handlers:
            if handler(request_code, result_code, uri):
                return True
        _log.debug("Unhandled result for request code %s", request_code)
        return False
