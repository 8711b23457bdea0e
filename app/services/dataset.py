"""Vehicle dataset providers.

Each provider exposes one coroutine, ``load_dataset()``, that returns an
immutable ``DatasetSnapshot``. The snapshot is loaded once and handed to the
selector functions; nothing here is queried per interaction.

Backends:
    StaticDatasetProvider    bundled JSON (or CSV, read with pandas)
    SupabaseDatasetProvider  the ``vehicles`` table in Supabase
    HttpDatasetProvider      a JSON document served over HTTP
"""

import asyncio
import json
import time
from collections import Counter
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pandas as pd
from pydantic import ValidationError
from supabase import Client

from app.core.config import Settings, get_settings
from app.core.enums import DatasetSource
from app.core.logging import log_data_quality, log_dataset_load, log_external_call
from app.models.dataset import DatasetSnapshot
from app.models.vehicle import VehicleRecord
from app.services.exceptions import DatasetIntegrityError, DatasetLoadError


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
        for err in exc.errors()
    )


def build_snapshot(documents: list[Any], source: str) -> DatasetSnapshot:
    """Validate raw documents into records.

    Malformed documents are skipped with a data-quality warning. Duplicate
    (make, model, year, trim) keys raise ``DatasetIntegrityError``.
    """
    records: list[VehicleRecord] = []
    rejected = 0
    for index, doc in enumerate(documents):
        if not isinstance(doc, dict):
            rejected += 1
            log_data_quality(source, index, f"expected an object, got {type(doc).__name__}")
            continue
        try:
            records.append(VehicleRecord.model_validate(doc))
        except ValidationError as e:
            rejected += 1
            log_data_quality(source, index, _describe(e))

    counts = Counter(r.key for r in records)
    duplicates = [key for key, n in counts.items() if n > 1]
    if duplicates:
        raise DatasetIntegrityError(duplicates, source=source)

    return DatasetSnapshot(records=tuple(records), source=source, rejected=rejected)


class DatasetProvider:
    """Base class: subclasses implement ``_fetch`` returning raw documents."""

    source: str = "unknown"

    async def _fetch(self) -> list[Any]:
        raise NotImplementedError

    async def load_dataset(self) -> DatasetSnapshot:
        start = time.time()
        try:
            documents = await self._fetch()
        except DatasetLoadError:
            raise
        except Exception as e:
            raise DatasetLoadError(f"Unexpected error reading dataset: {e}", self.source) from e
        snapshot = build_snapshot(documents, self.source)
        log_dataset_load(
            self.source, len(snapshot), snapshot.rejected, (time.time() - start) * 1000
        )
        return snapshot


class StaticDatasetProvider(DatasetProvider):
    """Bundled dataset file; ``.csv`` is read with pandas, anything else as JSON."""

    source = DatasetSource.STATIC.value

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def _fetch(self) -> list[Any]:
        if not self.path.exists():
            raise DatasetLoadError(f"Dataset file not found: {self.path}", self.source)
        if self.path.suffix.lower() == ".csv":
            return self._read_csv()
        return self._read_json()

    def _read_json(self) -> list[Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise DatasetLoadError(f"Could not read {self.path}: {e}", self.source) from e
        return _unwrap(data, self.source)

    def _read_csv(self) -> list[Any]:
        try:
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        except (OSError, ValueError) as e:
            raise DatasetLoadError(f"Could not read {self.path}: {e}", self.source) from e
        # Blank cells become missing fields so validation rejects the row
        return [
            {k: v for k, v in row.items() if v != ""}
            for row in df.to_dict(orient="records")
        ]


class SupabaseDatasetProvider(DatasetProvider):
    """Reads every document from the Supabase ``vehicles`` table once."""

    source = DatasetSource.SUPABASE.value

    def __init__(self, client_factory: Callable[[], Client], table: str = "vehicles"):
        self.client_factory = client_factory
        self.table = table

    async def _fetch(self) -> list[Any]:
        start = time.time()

        def _query():
            return self.client_factory().table(self.table).select("*").execute()

        try:
            result = await asyncio.to_thread(_query)
        except Exception as e:
            log_external_call("supabase", f"select {self.table}", False, (time.time() - start) * 1000)
            raise DatasetLoadError(f"Supabase query failed: {e}", self.source) from e

        log_external_call("supabase", f"select {self.table}", True, (time.time() - start) * 1000)
        if not isinstance(result.data, list):
            raise DatasetLoadError(
                f"Supabase table {self.table} returned no rows list", self.source
            )
        return result.data


class HttpDatasetProvider(DatasetProvider):
    """Fetches a JSON document: either a list of vehicles or ``{"vehicles": [...]}``."""

    source = DatasetSource.HTTP.value

    def __init__(self, url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.url = url
        self.client = client
        self.timeout = timeout

    async def _fetch(self) -> list[Any]:
        start = time.time()
        client = self.client or httpx.AsyncClient(timeout=self.timeout)
        try:
            resp = await client.get(self.url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log_external_call("http", f"GET {self.url}", False, (time.time() - start) * 1000)
            raise DatasetLoadError(f"Could not fetch {self.url}: {e}", self.source) from e
        finally:
            if self.client is None:
                await client.aclose()

        log_external_call("http", f"GET {self.url}", True, (time.time() - start) * 1000)
        return _unwrap(data, self.source)


def _unwrap(data: Any, source: str) -> list[Any]:
    if isinstance(data, dict) and isinstance(data.get("vehicles"), list):
        return data["vehicles"]
    if isinstance(data, list):
        return data
    raise DatasetLoadError("Dataset must be a list of vehicles", source)


def build_provider(settings: Settings | None = None) -> DatasetProvider:
    """Pick the dataset backend named by DATASET_SOURCE."""
    settings = settings or get_settings()
    source = DatasetSource.from_string(settings.dataset_source)

    if source == DatasetSource.SUPABASE:
        from app.services.db import get_supabase_client

        return SupabaseDatasetProvider(get_supabase_client, table=settings.vehicles_table)
    if source == DatasetSource.HTTP:
        return HttpDatasetProvider(settings.dataset_url)
    return StaticDatasetProvider(settings.dataset_path)
