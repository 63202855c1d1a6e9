"""
Unit of Work

하나의 게임 조작(강화/판매/환전/대결/출석)을 하나의 DB 트랜잭션으로 묶습니다.
- 블록 안에서 예외가 발생하면 모든 변경이 롤백됩니다 (취소/타임아웃 포함).
- 도메인 예외(EnhanceGameError)는 그대로 전달합니다.
- 그 밖의 예외는 로그를 남기고 InvariantViolationError로 변환합니다.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.transactions import in_transaction

from exceptions import EnhanceGameError, InvariantViolationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(operation: str) -> AsyncIterator[BaseDBAsyncClient]:
    """
    원자적 작업 단위

    Args:
        operation: 로그용 작업 이름

    Yields:
        트랜잭션 커넥션 (모든 쿼리에 using_db로 전달)

    Raises:
        EnhanceGameError: 도메인 오류 (롤백 후 그대로 전달)
        InvariantViolationError: 예상치 못한 오류 (롤백 후 변환)
    """
    try:
        async with in_transaction() as conn:
            yield conn
    except EnhanceGameError as e:
        if isinstance(e, InvariantViolationError):
            logger.error(f"Unit of work '{operation}' rolled back: {e.detail}")
        else:
            logger.debug(f"Unit of work '{operation}' rejected: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Unit of work '{operation}' aborted: {e}", exc_info=True)
        raise InvariantViolationError(f"{operation}: {e}") from e


@asynccontextmanager
async def join_or_begin(
    conn: Optional[BaseDBAsyncClient],
    operation: str
) -> AsyncIterator[BaseDBAsyncClient]:
    """
    이미 열린 작업 단위가 있으면 그대로 사용하고, 없으면 새로 시작

    원장 함수처럼 단독 호출과 상위 트랜잭션 참여를 모두 지원해야 할 때 사용합니다.
    """
    if conn is not None:
        yield conn
        return
    async with unit_of_work(operation) as new_conn:
        yield new_conn
