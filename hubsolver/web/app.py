"""FastAPI app exposing hubsolver solvers to web clients."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .runtime import HubSolverRuntime, build_runtime


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class SolveRequest(BaseModel):
    url: str


class MetadataRequest(BaseModel):
    html: str


def _require_url(body: SolveRequest) -> str:
    url = (body.url or "").strip()
    if not url.lower().startswith(("http://", "https://")):
        raise HTTPException(status_code=400, detail="url must be an absolute http(s) URL")
    return url


def create_app(runtime: Optional[HubSolverRuntime] = None) -> FastAPI:
    runtime = runtime or build_runtime()

    app = FastAPI(title="hubsolver API", version="0.1.0")

    @app.get("/health")
    def health() -> Dict:
        return {"ok": True, "time": _utc_now_iso()}

    @app.get("/api/solvers")
    def list_solvers() -> Dict[str, Any]:
        return {"solvers": runtime.solver_manager.describe()}

    @app.post("/api/resolve")
    def resolve(body: SolveRequest) -> Dict[str, Any]:
        return runtime.solver_manager.resolve(_require_url(body)).to_dict()

    @app.post("/api/solvers/{solver_name}")
    def run_solver(solver_name: str, body: SolveRequest) -> Dict[str, Any]:
        url = _require_url(body)
        try:
            solver = runtime.solver_manager.get(solver_name)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown solver: {solver_name}")
        return solver.solve(url).to_dict()

    @app.post("/api/metadata")
    def metadata(body: MetadataRequest) -> Dict[str, Any]:
        return runtime.classifier.classify(body.html).to_dict()

    return app


app = create_app()
