"""Explanation orchestrator: the per-request state machine.

One orchestrator owns one request lifetime (one explanation screen). It
holds the only copy of the explicit state (`Idle`, `Loading`, `Result` or
`Error`), the session cache and the one-shot history latch:

- `start()` serves the current mode from the session cache, or dispatches
  through the gateway and caches the outcome.
- `retry()` is `start()` again; a cached success short-circuits.
- `refresh()` empties the session cache first, forcing a live fetch.
- `switch_mode()` retargets the request and starts again.

The first success of a request lifetime appends one history record; later
successes (other modes, refreshes) never do. Every `start` stamps a
generation token and a completion only lands while its token is still the
latest one, so a superseded call can never overwrite a newer state.

Observers are held weakly: the view watching an orchestrator may disappear at
any time, and `close()` turns any in-flight completion into a no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable
import weakref

from plainly.cache import SessionCache
from plainly.core.classifier import classify
from plainly.core.exceptions import EmptyInputError, HistoryStoreError
from plainly.core.policy import (
    RESTORED_LABEL,
    default_mode,
    effective_mode,
    loading_label,
    shows_mode_picker,
)
from plainly.core.types import (
    ContentKindTag,
    ErrorState,
    ExplanationRequest,
    ExplanationResult,
    ExplanationState,
    IdleState,
    Link,
    LoadingState,
    ProcessingMode,
    ResultState,
    Success,
    Text,
)
from plainly.history.records import build_history_record, input_summary
from plainly.telemetry import TelemetryContext

if TYPE_CHECKING:
    from plainly.core.types import ContentKind, HistoryRecord
    from plainly.gateway import ExplanationGateway
    from plainly.history.store import HistoryStore
    from plainly.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)

# --- Telemetry scopes/keys ---
T_START = "orchestrator.start"
T_CACHE_HIT = "cache.hits"
T_CACHE_MISS = "cache.misses"
T_HISTORY_WRITE = "history.writes"


@runtime_checkable
class StateObserver(Protocol):
    """Anything that wants to hear about state transitions."""

    def state_changed(self, state: ExplanationState) -> None: ...


def failure_message(cause: str) -> str:
    """User-visible text for a failed attempt."""
    return f"Failed: {cause}"


class ExplanationOrchestrator:
    """Drives one explanation request from input to result."""

    def __init__(
        self,
        request: ExplanationRequest | None,
        *,
        gateway: ExplanationGateway,
        history: HistoryStore,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._request = request
        self._gateway = gateway
        self._history = history
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()
        self._cache = SessionCache()
        self._state: ExplanationState = IdleState()
        self._history_saved = False
        self._generation = 0
        self._closed = False
        self._observers: weakref.WeakSet[StateObserver] = weakref.WeakSet()
        self._display_input = (
            input_summary(request.kind) if request is not None else ""
        )

    # --- Construction ---

    @classmethod
    def for_input(
        cls,
        raw: ContentKind | None,
        *,
        gateway: ExplanationGateway,
        history: HistoryStore,
        mode: ProcessingMode | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> ExplanationOrchestrator:
        """Classify `raw` and pair it with its policy mode.

        `mode` is honored only for inputs that offer a mode picker; every other
        kind keeps its fixed default.
        """
        request = None
        if raw is not None:
            kind = classify(raw)
            chosen = default_mode(kind) if mode is None else effective_mode(kind, mode)
            request = ExplanationRequest(kind=kind, mode=chosen)
        return cls(request, gateway=gateway, history=history, telemetry=telemetry)

    @classmethod
    def from_history_record(
        cls,
        record: HistoryRecord,
        *,
        gateway: ExplanationGateway,
        history: HistoryStore,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> ExplanationOrchestrator:
        """Seed an orchestrator straight into `Result` from a stored record.

        No gateway call happens and the history latch starts set, so nothing
        done through this orchestrator can save the record again. Text and
        URL records get their request back so refresh and mode switches work.
        """
        kind = _restorable_kind(record)
        request = None
        if kind is not None:
            request = ExplanationRequest(
                kind=kind, mode=effective_mode(kind, record.mode)
            )
        orchestrator = cls(
            request, gateway=gateway, history=history, telemetry=telemetry
        )
        orchestrator._history_saved = True
        orchestrator._display_input = record.original_input_summary
        orchestrator._cache.set(record.mode, record.result_markdown)
        orchestrator._state = ResultState(
            result=ExplanationResult(markdown=record.result_markdown),
            mode=record.mode,
            restored=True,
        )
        return orchestrator

    # --- Read-only surface ---

    @property
    def state(self) -> ExplanationState:
        return self._state

    @property
    def request(self) -> ExplanationRequest | None:
        return self._request

    @property
    def mode(self) -> ProcessingMode | None:
        return self._request.mode if self._request is not None else None

    @property
    def display_input(self) -> str:
        """What the user submitted, as shown above the explanation."""
        return self._display_input

    @property
    def shows_mode_picker(self) -> bool:
        return shows_mode_picker(
            self._request.kind if self._request is not None else None
        )

    @property
    def status_label(self) -> str:
        """Caption for the current state (loading label, restored marker)."""
        match self._state:
            case LoadingState(label=label):
                return label
            case ResultState(restored=True):
                return RESTORED_LABEL
            case ResultState(mode=mode):
                return mode.privacy_caption
        return ""

    @property
    def history_saved(self) -> bool:
        return self._history_saved

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Observers ---

    def add_observer(self, observer: StateObserver) -> None:
        """Register `observer` weakly; it is dropped once collected."""
        if not self._closed:
            self._observers.add(observer)

    def remove_observer(self, observer: StateObserver) -> None:
        self._observers.discard(observer)

    def close(self) -> None:
        """Detach every observer and ignore any completion still in flight."""
        self._closed = True
        self._generation += 1
        self._observers.clear()
        logger.debug("Orchestrator closed")

    # --- Operations ---

    async def start(self) -> ExplanationState:
        """Serve the current request from cache or through the gateway."""
        if self._closed:
            return self._state
        self._generation += 1
        token = self._generation

        request = self._request
        if request is None:
            error = EmptyInputError()
            self._set_state(ErrorState(message=error.cause, error=error))
            return self._state

        with self._telemetry(T_START, mode=request.mode.value):
            cached = self._cache.get(request.mode)
            if cached is not None:
                logger.debug("Session cache hit for %s", request.mode.value)
                self._telemetry.count(T_CACHE_HIT)
                self._set_state(
                    ResultState(
                        result=ExplanationResult(markdown=cached),
                        mode=request.mode,
                        from_cache=True,
                    )
                )
                return self._state

            self._telemetry.count(T_CACHE_MISS)
            self._set_state(
                LoadingState(
                    label=loading_label(request.kind, request.mode),
                    mode=request.mode,
                )
            )
            outcome = await self._gateway.dispatch(request.kind, request.mode)

            if token != self._generation:
                logger.debug("Discarding superseded completion (token %d)", token)
                return self._state

            if not isinstance(outcome, Success):
                self._set_state(
                    ErrorState(
                        message=failure_message(outcome.error.cause),
                        error=outcome.error,
                    )
                )
                return self._state

            markdown = outcome.value
            self._cache.set(request.mode, markdown)
            self._set_state(
                ResultState(result=ExplanationResult(markdown=markdown), mode=request.mode)
            )
            if not self._history_saved:
                self._history_saved = True
                await self._save_history(request, markdown)
            return self._state

    async def retry(self) -> ExplanationState:
        """Start again with the same request; a cached success short-circuits."""
        return await self.start()

    async def refresh(self) -> ExplanationState:
        """Empty the session cache, then start, forcing a live fetch."""
        self._cache.clear()
        return await self.start()

    async def switch_mode(self, mode: ProcessingMode) -> ExplanationState:
        """Retarget the request to `mode` and start again.

        Kinds with a fixed mode ignore the requested mode.
        """
        if self._request is not None:
            resolved = effective_mode(self._request.kind, mode)
            if resolved is not mode:
                logger.debug(
                    "Mode %s not available for %s input; keeping %s",
                    mode.value,
                    self._request.kind.tag.value,
                    resolved.value,
                )
            self._request = self._request.with_mode(resolved)
        return await self.start()

    # --- Internals ---

    async def _save_history(self, request: ExplanationRequest, markdown: str) -> None:
        record = build_history_record(request.kind, markdown, request.mode)
        try:
            await self._history.append(record)
        except HistoryStoreError:
            logger.error("History record could not be saved", exc_info=True)
            return
        self._telemetry.count(T_HISTORY_WRITE)

    def _set_state(self, state: ExplanationState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer.state_changed(state)
            except Exception as e:
                logger.error(
                    "State observer '%s' failed: %s",
                    type(observer).__name__,
                    e,
                    exc_info=True,
                )


def _restorable_kind(record: HistoryRecord) -> ContentKind | None:
    summary = record.original_input_summary
    if not summary.strip():
        return None
    if record.kind is ContentKindTag.TEXT:
        return classify(Text(body=summary))
    if record.kind is ContentKindTag.URL:
        return classify(Link(url=summary))
    return None
