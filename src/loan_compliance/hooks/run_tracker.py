"""Stage timings for one compliance run, scoped to the current context.

A run covers one document: ``extraction``, then the analyzer's ``prompt``,
``inference`` and ``report`` stages.  The active run lives in a ContextVar,
so concurrent documents on one event loop never share a record.  With no
active run, ``track_stage`` still times the body but records nothing.
"""

from __future__ import annotations

import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Iterator

import structlog

from loan_compliance.models import RunAnalytics, StageMetrics

_active: ContextVar[RunAnalytics | None] = ContextVar("compliance_run", default=None)


def get_current_run() -> RunAnalytics | None:
    return _active.get()


def start_run(doc_id: str = "", run_id: str | None = None) -> RunAnalytics:
    """Open a run for *doc_id* and tag subsequent log records with its id."""
    run = RunAnalytics(run_id=run_id or uuid.uuid4().hex[:12], doc_id=doc_id)
    _active.set(run)
    structlog.contextvars.bind_contextvars(run_id=run.run_id)
    return run


def end_run() -> RunAnalytics | None:
    """Close the active run; its status is ``failed`` if any stage failed."""
    run = _active.get()
    if run is None:
        return None
    run.finalize()
    _active.set(None)
    structlog.contextvars.unbind_contextvars("run_id")
    return run


@contextmanager
def track_stage(name: str) -> Iterator[StageMetrics]:
    """Time the body as stage *name*; exceptions mark it ``failed`` and propagate."""
    run = _active.get()
    stage = StageMetrics(stage=name, started_at=datetime.now(timezone.utc))
    structlog.contextvars.bind_contextvars(stage=name)
    started = time.perf_counter()
    try:
        yield stage
    except BaseException:
        stage.status = "failed"
        raise
    else:
        stage.status = "completed"
    finally:
        stage.duration_ms = (time.perf_counter() - started) * 1000
        stage.ended_at = datetime.now(timezone.utc)
        if run is not None:
            run.stages.append(stage)
        structlog.contextvars.unbind_contextvars("stage")
