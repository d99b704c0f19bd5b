from sqlalchemy.exc import SQLAlchemyError


class StubFailingSession:
    """Stub of an async session whose commit always fails.

    Records whether ``rollback`` was awaited so tests can check that a
    failed write leaves the session usable.

    Attributes:
        error (SQLAlchemyError): The error raised by ``commit``.
        rolled_back (bool): Whether ``rollback`` was called.
    """

    def __init__(self, error: SQLAlchemyError):
        self.error = error
        self.rolled_back = False

    async def commit(self) -> None:
        raise self.error

    async def rollback(self) -> None:
        self.rolled_back = True
