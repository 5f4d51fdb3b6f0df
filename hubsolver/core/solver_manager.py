"""
Solver Manager
Routes a URL to the solver responsible for its page type
"""
from typing import Dict, List
import logging
import threading

from ..models.extraction_result import ExtractionResult
from ..solvers.base import BaseSolver

logger = logging.getLogger(__name__)


class SolverManager:
    """Ordered solver registry; the first solver claiming a URL wins"""

    def __init__(self):
        self._solvers: Dict[str, BaseSolver] = {}
        self._lock = threading.RLock()

    def register(self, solver):
        """Register a solver; registration order is routing priority"""
        if not isinstance(solver, BaseSolver):
            raise TypeError(f"Invalid solver type for register(): {type(solver)}. Expected BaseSolver.")
        if not getattr(solver, "name", ""):
            raise ValueError("Solver must define non-empty 'name'.")
        with self._lock:
            self._solvers[solver.name] = solver

    def unregister(self, solver_name: str):
        with self._lock:
            self._solvers.pop(solver_name, None)

    def get(self, solver_name: str) -> BaseSolver:
        with self._lock:
            if solver_name not in self._solvers:
                raise KeyError(solver_name)
            return self._solvers[solver_name]

    def get_solver_names(self) -> List[str]:
        with self._lock:
            return list(self._solvers.keys())

    def describe(self) -> List[dict]:
        with self._lock:
            return [solver.describe() for solver in self._solvers.values()]

    def select(self, url: str) -> BaseSolver:
        """
        Pick the solver for a URL.

        Solvers with host fragments are tried first, in registration order;
        the first generic solver (no fragments) is the fallback.
        """
        with self._lock:
            solvers = list(self._solvers.values())
        for solver in solvers:
            if solver.domains and solver.can_handle(url):
                return solver
        for solver in solvers:
            if not solver.domains:
                return solver
        raise LookupError(f"No solver registered for {url}")

    def resolve(self, url: str) -> ExtractionResult:
        solver = self.select(url)
        logger.info("Resolving %s with %s", url, solver.name)
        return solver.solve(url).with_payload(solver=solver.name)
