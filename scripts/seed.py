"""Database seeder for the product catalog, run outside the API process."""
import argparse
import asyncio
import time

from catalog.database import engine, async_session, Base
from catalog.seed import run_seeder
import catalog.models  # noqa: F401  (registers the products table)


async def seed(reset: bool = False):
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
            print("  Dropped existing tables")
        await conn.run_sync(Base.metadata.create_all)

    inserted = await run_seeder(async_session)
    await engine.dispose()

    elapsed = time.perf_counter() - start
    print(f"Seeding complete in {elapsed:.2f}s")
    print(f"  Products inserted: {inserted}")


def main():
    parser = argparse.ArgumentParser(description="Seed the product catalog database")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()
    asyncio.run(seed(reset=args.reset))


if __name__ == "__main__":
    main()
