"""Bulk-insert synthetic translation bundles for load and search testing."""

from __future__ import annotations

import argparse
import asyncio
import sys

from linguastore.core.database import get_session_factory
from linguastore.schemas.translation import TranslationCreate
from linguastore.services.translation import TranslationService
from linguastore.utils import generate_translation_samples


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Seed random translation bundles using TranslationService."
    )
    parser.add_argument(
        "--count",
        type=int,
        default=100_000,
        help="Number of bundles to create (default: 100000).",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=1000,
        help="Bundles committed per transaction (default: 1000).",
    )
    parser.add_argument(
        "--entries",
        type=int,
        default=10,
        help="Translation keys generated per bundle (default: 10).",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible data.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate payloads without committing database changes.",
    )
    args = parser.parse_args(argv)
    if args.count < 0 or args.batch_size < 1 or args.entries < 1:
        parser.error("--count must be >= 0; --batch-size and --entries must be >= 1")
    return args


async def _apply_seed(
    *,
    count: int,
    batch_size: int,
    entries: int,
    seed: int | None,
    dry_run: bool,
) -> int:
    session_factory = get_session_factory()
    samples = generate_translation_samples(count, entries_per_bundle=entries, seed=seed)
    inserted = 0
    batch_index = 0

    while inserted < count:
        async with session_factory() as session:
            service = TranslationService(session)
            for payload in samples:
                await service.create_translation(TranslationCreate(**payload))
                inserted += 1
                if inserted % batch_size == 0:
                    break

            if dry_run:
                await session.rollback()
            else:
                await session.commit()
        batch_index += 1
        print(f"batch {batch_index}: {inserted}/{count} bundles", file=sys.stderr)

    return inserted


async def _main() -> int:
    args = _parse_args()
    inserted = await _apply_seed(
        count=args.count,
        batch_size=args.batch_size,
        entries=args.entries,
        seed=args.seed,
        dry_run=args.dry_run,
    )
    action = "validated" if args.dry_run else "inserted"
    print(f"{action} {inserted} translation bundle{'' if inserted == 1 else 's'}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(_main()))
