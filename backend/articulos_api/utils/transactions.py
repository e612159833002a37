from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """
    Run the enclosed block as one unit of work on `session`.

    With no transaction active, a new one is begun and committed when the
    block exits normally. If a transaction is already active a SAVEPOINT is
    used instead: it is released on success and the outer transaction is left
    for the caller to commit. On any exception only the enclosed work is
    rolled back and the exception propagates.
    """
    if session.in_transaction():
        cm = session.begin_nested()
    else:
        cm = session.begin()
    with cm:
        yield session
