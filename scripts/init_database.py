#!/usr/bin/env python3
"""
데이터베이스 스키마 생성

실행: python scripts/init_database.py
"""
import asyncio
import os
import sys

# 프로젝트 루트를 path에 추가
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from dotenv import load_dotenv
from tortoise import Tortoise

load_dotenv()


async def init_db():
    """데이터베이스 연결 초기화"""
    db_url = os.getenv("DATABASE_URL") or "sqlite://enhance.db"
    print(f"📡 데이터베이스 연결 중: {db_url}")

    await Tortoise.init(
        db_url=db_url,
        modules={"models": ["models"]}
    )


async def create_schema():
    """스키마 생성"""
    print("\n📋 테이블 스키마 생성 중...")
    await Tortoise.generate_schemas()
    print("✅ 스키마 생성 완료!")


async def main():
    try:
        await init_db()
        await create_schema()
    finally:
        await Tortoise.close_connections()


if __name__ == "__main__":
    asyncio.run(main())
