import logging
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from functools import wraps
from datetime import datetime

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_db_session, session_commit, session_rollback

logger = logging.getLogger(__name__)


class TransactionManager:
    """
    Utility class for running multi-step writes as one database transaction,
    with rollback on failure and retry for transient lock errors.
    """

    # Transactions slower than this are logged as warnings
    TRANSACTION_TIMEOUT = 30

    # Retry configuration
    MAX_RETRIES = 3
    RETRY_DELAY_BASE = 0.1  # Base delay in seconds

    @staticmethod
    @asynccontextmanager
    async def atomic_transaction(session: Optional[AsyncSession] = None,
                                 timeout: Optional[int] = None) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for atomic database transactions.

        Commits when the block finishes, rolls back every write of the block
        when it raises. Uses the given session or opens a new one.

        Usage:
            async with TransactionManager.atomic_transaction(session) as session:
                await OrderRepository.create(..., session)
                await WalletBalanceRepository.debit_eur(..., session)
        """
        timeout = timeout or TransactionManager.TRANSACTION_TIMEOUT

        if session is None:
            async with get_db_session() as new_session:
                async with TransactionManager.atomic_transaction(new_session, timeout) as tx_session:
                    yield tx_session
            return

        transaction_start = datetime.now()
        logger.debug(f"Transaction started at {transaction_start}")
        try:
            yield session

            duration = (datetime.now() - transaction_start).total_seconds()
            if duration > timeout:
                logger.warning(f"Transaction exceeded timeout: {duration}s > {timeout}s")

            await session_commit(session)
            logger.debug(f"Transaction committed successfully in {duration:.2f}s")
        except Exception as e:
            try:
                await session_rollback(session)
                logger.info(f"Transaction rolled back due to error: {str(e)}")
            except Exception as rollback_error:
                logger.critical(f"Failed to rollback transaction: {str(rollback_error)}")
            raise

    @staticmethod
    def with_retry(max_retries: Optional[int] = None, delay_base: Optional[float] = None):
        """
        Decorator for automatic retry of database operations with exponential backoff.

        Only "database is locked" style OperationalErrors are retried. Business
        exceptions propagate on the first attempt.
        """
        max_retries = max_retries or TransactionManager.MAX_RETRIES
        delay_base = delay_base or TransactionManager.RETRY_DELAY_BASE

        def decorator(func):
            @wraps(func)
            async def wrapper(*args, **kwargs):
                last_exception = None

                for attempt in range(max_retries + 1):
                    try:
                        return await func(*args, **kwargs)
                    except OperationalError as e:
                        last_exception = e

                        if attempt == max_retries:
                            logger.error(f"Function {func.__name__} failed after {max_retries} retries: {str(e)}")
                            break

                        delay = delay_base * (2 ** attempt) + (delay_base * 0.1 * attempt)
                        logger.warning(f"Attempt {attempt + 1} failed for {func.__name__}, retrying in {delay:.2f}s: {str(e)}")
                        await asyncio.sleep(delay)

                raise last_exception

            return wrapper
        return decorator
