from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionScope(ABC):
    """
    Handle for one open transaction.

    Passed to every store write that must commit or roll back together.
    """


class UnitOfWork(ABC):
    """Port for opening atomic multi-store transactions."""

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[TransactionScope]:
        """
        Open a transaction scope.

        Commits when the block exits normally and rolls back when it raises;
        either every write made through the scope is applied or none is.
        """
        ...
