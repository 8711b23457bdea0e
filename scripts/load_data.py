#!/usr/bin/env python
"""Seed the Supabase ``vehicles`` table from a local JSON or CSV dataset.

Records are validated with the same rules the app applies at load time, so
rows the app would reject never reach the table.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import get_settings
from app.services.dataset import StaticDatasetProvider
from app.services.db import get_supabase_client
from app.services.exceptions import DatasetLoadError


async def load(path: Path, batch_size: int = 500) -> int:
    settings = get_settings()
    snapshot = await StaticDatasetProvider(path).load_dataset()
    client = get_supabase_client()

    rows = [r.model_dump(by_alias=True) for r in snapshot]
    for i in range(0, len(rows), batch_size):
        batch = rows[i : i + batch_size]

        def _insert_batch(b=batch):
            return client.table(settings.vehicles_table).insert(b).execute()

        await asyncio.to_thread(_insert_batch)
        print(f"Inserted {min(i + batch_size, len(rows))}/{len(rows)} records...")

    return len(rows)


def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(get_settings().dataset_path)

    if not path.exists():
        print(f"Error: dataset file not found at {path}")
        sys.exit(1)

    print(f"Loading vehicles from {path}...")
    try:
        count = asyncio.run(load(path))
    except DatasetLoadError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"Successfully loaded {count} vehicle records into Supabase")


if __name__ == "__main__":
    main()
