"""FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException

from app.core.config import get_settings
from app.models.dataset import DatasetSnapshot
from app.services.dataset import build_provider
from app.services.form import FormSession

_session: FormSession | None = None


def get_form_session() -> FormSession:
    """Dependency for the process-wide form session (holds the dataset snapshot)."""
    global _session
    if _session is None:
        settings = get_settings()
        _session = FormSession(
            build_provider(settings),
            submit_delay_ms=settings.submit_delay_ms,
            load_timeout=settings.dataset_load_timeout,
        )
    return _session


def get_dataset(
    session: Annotated[FormSession, Depends(get_form_session)],
) -> DatasetSnapshot:
    """Dependency for the loaded snapshot; 503 until the load succeeds."""
    if session.snapshot is None:
        outcome = session.load_outcome
        raise HTTPException(status_code=503, detail=outcome.model_dump(mode="json"))
    return session.snapshot
