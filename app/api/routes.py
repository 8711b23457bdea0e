"""FastAPI routes backing the four selection controls and the Calculate button."""

from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_dataset, get_form_session
from app.core.enums import SelectionField
from app.core.logging import logger
from app.models.dataset import DatasetSnapshot, LoadOutcome
from app.models.selection import SelectionState, SubmissionOutcome
from app.services import selector
from app.services.exceptions import InvalidSelectionError
from app.services.form import FormSession

router = APIRouter()

Dataset = Annotated[DatasetSnapshot, Depends(get_dataset)]
Session = Annotated[FormSession, Depends(get_form_session)]


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class SelectionRequest(BaseModel):
    state: SelectionState = SelectionState()
    field: SelectionField
    value: Optional[Any] = None


class CalculateRequest(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    trim: Optional[str] = None


# ---------------------------------------------------------------------------
# Dataset status
# ---------------------------------------------------------------------------


@router.get("/dataset", response_model=LoadOutcome)
async def dataset_status(session: Session):
    """Current load status of the vehicle dataset."""
    return session.load_outcome


@router.post("/dataset/reload", response_model=LoadOutcome)
async def reload_dataset(session: Session):
    """Retry the dataset load (used by the "data unavailable" state)."""
    return await session.reload()


# ---------------------------------------------------------------------------
# Option lists
# ---------------------------------------------------------------------------


@router.get("/makes")
async def get_makes(dataset: Dataset):
    return {"makes": selector.list_makes(dataset)}


@router.get("/models")
async def get_models(dataset: Dataset, make: str = ""):
    return {"models": selector.list_models(dataset, make)}


@router.get("/years")
async def get_years(dataset: Dataset, make: str = "", model: str = ""):
    return {"years": selector.list_years(dataset, make, model)}


@router.get("/trims")
async def get_trims(dataset: Dataset, make: str = "", model: str = "", year: str = ""):
    return {"trims": selector.list_trims(dataset, make, model, year)}


# ---------------------------------------------------------------------------
# Selection + Calculate
# ---------------------------------------------------------------------------


@router.post("/selection", response_model=SelectionState)
async def change_selection(req: SelectionRequest, dataset: Dataset):
    """Apply one field change and return the new state with its option lists."""
    try:
        return selector.apply_choice(dataset, req.state, req.field, req.value)
    except InvalidSelectionError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/calculate", response_model=SubmissionOutcome)
async def calculate(req: CalculateRequest, dataset: Dataset):
    """Look up factory specs and the maximum wheel size for a full selection."""
    state = SelectionState(make=req.make, model=req.model, year=req.year, trim=req.trim)
    outcome = selector.submit_selection(dataset, state)
    if not outcome.ok:
        logger.warning(f"Calculate {outcome.status.value}: {outcome.message}")
    return outcome
