"""Scoped transaction over one or more repositories.

Repositories that take part implement ``Transactional``: while a
transaction is open they stage writes, ``commit()`` makes the staged writes
durable and ``rollback()`` discards them. A ``Transaction`` that exits
without an explicit ``commit()`` rolls every participant back, so a use
case either persists all of its writes or none of them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import TracebackType

logger = logging.getLogger(__name__)


class Transactional(ABC):

    @abstractmethod
    def begin(self) -> None:
        """Start staging writes."""

    @abstractmethod
    def commit(self) -> None:
        """Make every staged write durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every staged write."""


class Transaction:
    """All-or-nothing scope, used as a context manager.

    ::

        with Transaction(order_repo, product_repo) as tx:
            ...
            tx.commit()
    """

    def __init__(self, *participants: Transactional) -> None:
        self._participants = participants
        self._active = False

    def __enter__(self) -> Transaction:
        begun: list[Transactional] = []
        try:
            for participant in self._participants:
                participant.begin()
                begun.append(participant)
        except Exception:
            for participant in begun:
                participant.rollback()
            raise
        self._active = True
        logger.debug("Transaction opened over %d repositories", len(self._participants))
        return self

    def commit(self) -> None:
        # Participants commit in the order given. A failure part-way leaves
        # the earlier ones committed; only the remaining ones roll back.
        if not self._active:
            raise RuntimeError("Transaction is not active")
        for participant in self._participants:
            participant.commit()
        self._active = False
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        if not self._active:
            return
        for participant in self._participants:
            participant.rollback()
        self._active = False
        logger.debug("Transaction rolled back")

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # Anything not committed by now is discarded; exceptions propagate.
        self.rollback()
