"""Runtime bootstrap for the hubsolver web API."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from ..core.settings_manager import SettingsManager
from ..core.solver_manager import SolverManager
from ..core.transport import HttpTransport
from ..solvers import HBLinksSolver, HubCDNResolver, HubDriveResolver, MetadataClassifier, MoviePageExtractor


@dataclass
class HubSolverRuntime:
    """Shared service graph used by web endpoints."""

    settings: SettingsManager
    transport: HttpTransport
    solver_manager: SolverManager
    classifier: MetadataClassifier


def build_runtime(settings: SettingsManager = None, transport: HttpTransport = None) -> HubSolverRuntime:
    """Create and wire settings, transport and solvers."""

    settings = settings or SettingsManager()
    transport = transport or HttpTransport()
    level = str(settings.get("log_level", "INFO") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO))

    solver_manager = SolverManager()
    solver_manager.register(HBLinksSolver(transport, settings))
    solver_manager.register(HubCDNResolver(transport, settings))
    solver_manager.register(HubDriveResolver(transport, settings))
    # Generic fallback goes last.
    solver_manager.register(MoviePageExtractor(transport, settings))

    return HubSolverRuntime(
        settings=settings,
        transport=transport,
        solver_manager=solver_manager,
        classifier=MetadataClassifier(),
    )
