"""Form session: one dataset snapshot, one selection state, many subscribers.

The session owns the lifecycle (load, retry, choose, submit) and publishes
every new ``SelectionState`` or outcome to its subscribers. Rendering code
subscribes instead of holding state itself.
"""

import asyncio
from typing import Any, Callable, Optional

from app.core.enums import LoadStatus, SelectionField, SelectionStage
from app.core.logging import log_error, logger
from app.models.dataset import DatasetSnapshot, LoadOutcome
from app.models.selection import SelectionState, SubmissionOutcome
from app.services import selector
from app.services.dataset import DatasetProvider
from app.services.exceptions import DatasetLoadError, DatasetNotReadyError

Listener = Callable[["FormSession"], None]


class FormSession:
    """Single-user form state machine.

    Not thread-safe; every call is expected to run to completion on one
    event loop before the next one starts.
    """

    def __init__(
        self,
        provider: DatasetProvider,
        submit_delay_ms: int = 500,
        load_timeout: Optional[float] = None,
    ) -> None:
        self.provider = provider
        self.submit_delay_ms = submit_delay_ms
        self.load_timeout = load_timeout

        self.snapshot: Optional[DatasetSnapshot] = None
        self.load_outcome = LoadOutcome(status=LoadStatus.LOADING, source=provider.source)
        self.state = selector.empty_selection()
        self.outcome: Optional[SubmissionOutcome] = None
        self.submitting = False
        self._listeners: list[Listener] = []

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------------------------------------------------------------------------
    # Dataset lifecycle
    # -------------------------------------------------------------------------

    @property
    def ready(self) -> bool:
        return self.snapshot is not None

    @property
    def dataset(self) -> DatasetSnapshot:
        if self.snapshot is None:
            raise DatasetNotReadyError(
                f"Vehicle data is {self.load_outcome.status.value}"
            )
        return self.snapshot

    async def load(self) -> LoadOutcome:
        """Load the dataset once. Failures leave the session ``unavailable``."""
        self.load_outcome = LoadOutcome(status=LoadStatus.LOADING, source=self.provider.source)
        self._notify()
        try:
            if self.load_timeout:
                snapshot = await asyncio.wait_for(
                    self.provider.load_dataset(), timeout=self.load_timeout
                )
            else:
                snapshot = await self.provider.load_dataset()
        except DatasetLoadError as e:
            log_error("Dataset load failed", e, source=self.provider.source)
            return self._unavailable(str(e))
        except asyncio.TimeoutError:
            log_error("Dataset load timed out", source=self.provider.source, timeout=self.load_timeout)
            return self._unavailable(f"Timed out after {self.load_timeout}s")

        self.snapshot = snapshot
        self.state = selector.empty_selection()
        self.outcome = None
        self.load_outcome = LoadOutcome(
            status=LoadStatus.READY,
            source=snapshot.source,
            record_count=len(snapshot),
            rejected_count=snapshot.rejected,
        )
        self._notify()
        return self.load_outcome

    async def reload(self) -> LoadOutcome:
        """Retry after a failed load, or refresh a loaded snapshot."""
        logger.info(f"Reloading dataset source={self.provider.source}")
        return await self.load()

    def _unavailable(self, error: str) -> LoadOutcome:
        # A previously loaded snapshot stays usable
        status = LoadStatus.READY if self.snapshot is not None else LoadStatus.UNAVAILABLE
        self.load_outcome = LoadOutcome(
            status=status,
            source=self.provider.source,
            record_count=len(self.snapshot) if self.snapshot is not None else 0,
            rejected_count=self.snapshot.rejected if self.snapshot is not None else 0,
            error=error,
        )
        self._notify()
        return self.load_outcome

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @property
    def stage(self) -> SelectionStage:
        """Selection stage, or SUBMITTED while a successful result is showing."""
        if self.outcome is not None and self.outcome.ok:
            return SelectionStage.SUBMITTED
        return self.state.stage

    def makes(self) -> list[str]:
        return selector.list_makes(self.dataset)

    def choose(self, field: SelectionField | str, value: Any) -> SelectionState:
        """Apply a field change; the last result is discarded."""
        self.state = selector.apply_choice(self.dataset, self.state, field, value)
        self.outcome = None
        self._notify()
        return self.state

    def reset(self) -> SelectionState:
        self.state = selector.empty_selection()
        self.outcome = None
        self._notify()
        return self.state

    async def submit(self) -> SubmissionOutcome:
        """Match the selection and compute the result after the loading delay."""
        dataset = self.dataset
        self.outcome = None
        self.submitting = True
        self._notify()
        try:
            outcome = selector.submit_selection(dataset, self.state)
            if self.submit_delay_ms:
                await asyncio.sleep(self.submit_delay_ms / 1000)
        finally:
            self.submitting = False

        if not outcome.ok:
            logger.info(f"Submit {outcome.status.value}: {outcome.message}")
        self.outcome = outcome
        self._notify()
        return outcome
