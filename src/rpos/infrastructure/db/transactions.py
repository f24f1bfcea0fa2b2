from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rpos.application.errors import TransactionError

logger = logging.getLogger(__name__)


@contextmanager
def transaction_scope(engine: Engine, action: str) -> Iterator[Session]:
    """Run a block on one session: commit on success, roll back on any error.

    Database errors are re-raised as TransactionError with the driver message
    as details. The session, and with it the pooled connection, is released
    on every path.
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("transaction_failed", extra={"action": action})
        raise TransactionError(f"Failed to {action}", details=str(exc)) from exc
    except Exception:
        session.rollback()
        logger.info("transaction_rolled_back", extra={"action": action})
        raise
    finally:
        session.close()
