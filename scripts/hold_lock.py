"""CLI entrypoint to take a named lock in Redis and hold it for a while."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from kvadapter.adapters import RedisAdapter
from kvadapter.core.errors import LockTimeout
from kvadapter.core.settings import Settings
from kvadapter.utils.logging import get_logger


logger = get_logger("HoldLockCLI")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Acquire a distributed lock and hold it.")
    parser.add_argument("name", help="Lock name")
    parser.add_argument("--config", type=Path, default=None, help="Path to settings YAML (defaults to environment)")
    parser.add_argument("--hold", type=float, default=0.5, help="Seconds to hold the lock once acquired")
    parser.add_argument("--expiration", type=float, default=None, help="Override lock expiration in seconds")
    parser.add_argument("--timeout", type=float, default=None, help="Override acquisition timeout in seconds")
    args = parser.parse_args()

    settings = Settings.from_file(args.config) if args.config else Settings.from_env()
    adapter = RedisAdapter.from_settings(settings)

    try:
        async with adapter.lock(args.name, expiration=args.expiration, timeout=args.timeout) as expires_at:
            logger.info("Holding lock %s (expires at %.3f) for %.2fs", args.name, expires_at, args.hold)
            await asyncio.sleep(args.hold)
    except LockTimeout as exc:
        logger.error("%s", exc)
        return 1
    finally:
        await adapter.close()

    logger.info("Done with lock %s", args.name)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
