"""Process-wide composition root and scenario-first helpers.

`create_app()` builds the shared pieces once (backends, gateway, history
store) from frozen configuration. Every explanation screen then gets its own
`ExplanationOrchestrator` from the app, all sharing the one history store.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from plainly.backends import (
    GeminiCloudBackend,
    HttpLocalBackend,
    MockCloudBackend,
    MockLocalBackend,
)
from plainly.config import FrozenConfig, resolve_config
from plainly.gateway import ExplanationGateway
from plainly.history import JSONHistoryStore
from plainly.orchestrator import ExplanationOrchestrator
from plainly.telemetry import TelemetryContext

if TYPE_CHECKING:  # pragma: no cover - typing only
    from plainly.backends import CloudCapability, LocalCapability
    from plainly.core.types import (
        ContentKind,
        ExplanationState,
        HistoryRecord,
        ProcessingMode,
    )
    from plainly.history import HistoryStore
    from plainly.telemetry import TelemetryContextProtocol, TelemetryReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlainlyApp:
    """Shared dependencies handed to every orchestrator."""

    config: FrozenConfig
    gateway: ExplanationGateway
    history: HistoryStore
    telemetry: TelemetryContextProtocol

    def orchestrator_for(
        self, raw: ContentKind | None, *, mode: ProcessingMode | None = None
    ) -> ExplanationOrchestrator:
        """New orchestrator for one submitted input."""
        return ExplanationOrchestrator.for_input(
            raw,
            gateway=self.gateway,
            history=self.history,
            mode=mode,
            telemetry=self.telemetry,
        )

    def restore(self, record: HistoryRecord) -> ExplanationOrchestrator:
        """Orchestrator seeded from a stored record; never dispatches on creation."""
        return ExplanationOrchestrator.from_history_record(
            record,
            gateway=self.gateway,
            history=self.history,
            telemetry=self.telemetry,
        )


def create_backends(cfg: FrozenConfig) -> tuple[LocalCapability, CloudCapability]:
    """Real backends when `use_real_api` is set, deterministic mocks otherwise."""
    if not cfg.use_real_api:
        return MockLocalBackend(), MockCloudBackend()
    return HttpLocalBackend.from_config(cfg), GeminiCloudBackend.from_config(cfg)


def create_app(
    cfg: FrozenConfig | None = None,
    *,
    history: HistoryStore | None = None,
    reporters: tuple[TelemetryReporter, ...] = (),
) -> PlainlyApp:
    """Build the composition root.

    Args:
        cfg: Frozen configuration. If omitted, `resolve_config()` is used.
        history: Store override; defaults to the JSON store at
            `cfg.history_path`.
        reporters: Telemetry reporters; inert unless telemetry is enabled.
    """
    final_cfg = cfg or resolve_config().to_frozen()
    telemetry = TelemetryContext(*reporters)
    local, cloud = create_backends(final_cfg)
    gateway = ExplanationGateway(
        local=local,
        cloud=cloud,
        timeout=final_cfg.request_timeout_seconds,
        telemetry=telemetry,
    )
    logger.debug("Created app with %s", final_cfg)
    return PlainlyApp(
        config=final_cfg,
        gateway=gateway,
        history=history or JSONHistoryStore(final_cfg.history_path),
        telemetry=telemetry,
    )


async def explain(
    raw: ContentKind | None,
    *,
    mode: ProcessingMode | None = None,
    app: PlainlyApp | None = None,
) -> ExplanationState:
    """Explain one input end to end and return the final state.

    Example:
        ```python
        from plainly import Text, explain

        state = await explain(Text("Terms apply. Offer void where prohibited."))
        ```
    """
    orchestrator = (app or create_app()).orchestrator_for(raw, mode=mode)
    try:
        return await orchestrator.start()
    finally:
        orchestrator.close()
