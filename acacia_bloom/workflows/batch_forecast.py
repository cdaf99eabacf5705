"""
Batch forecasting across many products.

Each product forecast is independent and side-effect free, so the batch is
embarrassingly parallel.

Architecture
------------
* Module-scope worker only, so it pickles under the "spawn" start method.
* Products are chunked evenly across ``n_workers`` processes; ``n_workers <= 1``
  runs the same worker inline (no executor).
* A product that fails is logged and reported in ``BatchForecastReport.errors``;
  the rest of the batch still completes.
* Cancellation happens at the executor boundary (``shutdown`` /
  ``cancel_futures``), never inside the engine.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config import DEFAULT_FORECAST_DAYS
from ..domain.models import ForecastingInputs, ForecastResult
from ..domain.validation import validate_forecast_days
from ..engine import AcaciaBloomEngine

logger = logging.getLogger(__name__)


@dataclass
class BatchForecastReport:
    """Outcome of a batch run, keyed by product id."""
    results: Dict[str, ForecastResult] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def n_succeeded(self) -> int:
        return len(self.results)

    @property
    def n_failed(self) -> int:
        return len(self.errors)


# ── Worker ───────────────────────────────────────────────────────────────────

def _forecast_chunk_worker(chunk_args: dict) -> dict:
    """
    Forecast one chunk of products.

    ``chunk_args`` keys
    -------------------
    today_iso : str
        ISO date of horizon day 0.
    forecast_days : int
    settings : dict | None
    inputs : list[ForecastingInputs]

    Returns
    -------
    dict  {"results": {product_id: ForecastResult}, "errors": {product_id: str}}
    """
    today = date.fromisoformat(chunk_args["today_iso"])
    forecast_days: int = chunk_args["forecast_days"]
    engine = AcaciaBloomEngine(chunk_args["settings"])

    results: dict = {}
    errors: dict = {}
    for inputs in chunk_args["inputs"]:
        try:
            results[inputs.product_id] = engine.generate_forecast(inputs, forecast_days, today)
        except (ValueError, TypeError, ArithmeticError) as exc:
            logger.warning("Forecast failed for product %s: %s", inputs.product_id, exc)
            errors[inputs.product_id] = f"{type(exc).__name__}: {exc}"

    return {"results": results, "errors": errors}


# ── Orchestrator ─────────────────────────────────────────────────────────────

def run_batch_forecast(
    inputs_list: Sequence[ForecastingInputs],
    forecast_days: int = DEFAULT_FORECAST_DAYS,
    today: Optional[date] = None,
    n_workers: int = 1,
    settings: Optional[Dict[str, Any]] = None,
    on_progress: Optional[Callable[[int], None]] = None,
) -> BatchForecastReport:
    """
    Forecast every product in ``inputs_list``.

    Parameters
    ----------
    inputs_list : sequence of ForecastingInputs
        Product ids should be unique; a repeated id keeps the last result.
    forecast_days : int
    today : date | None
        Shared horizon start for the whole batch (default: date.today()).
    n_workers : int
        Worker processes; ``<= 1`` runs sequentially in this process.
    settings : dict | None
        Engine settings overrides, passed to every worker.
    on_progress : callable(n_done: int) | None
        Called after each chunk with the cumulative number of products done.

    Returns
    -------
    BatchForecastReport
    """
    is_valid, message = validate_forecast_days(forecast_days)
    if not is_valid:
        raise ValueError(message)

    report = BatchForecastReport()
    n = len(inputs_list)
    if n == 0:
        return report

    if today is None:
        today = date.today()
    today_iso = today.isoformat()

    def _chunk_args(chunk: List[ForecastingInputs]) -> dict:
        return {
            "today_iso": today_iso,
            "forecast_days": forecast_days,
            "settings": settings,
            "inputs": chunk,
        }

    if n_workers <= 1:
        outcome = _forecast_chunk_worker(_chunk_args(list(inputs_list)))
        report.results.update(outcome["results"])
        report.errors.update(outcome["errors"])
        if on_progress:
            on_progress(n)
        return report

    chunk_size = max(1, math.ceil(n / n_workers))
    chunks = [list(inputs_list[i: i + chunk_size]) for i in range(0, n, chunk_size)]
    done_count = 0

    with ProcessPoolExecutor(max_workers=n_workers) as executor:
        future_map = {
            executor.submit(_forecast_chunk_worker, _chunk_args(chunk)): chunk
            for chunk in chunks
        }

        for future in as_completed(future_map):
            chunk = future_map[future]
            try:
                outcome = future.result()
                report.results.update(outcome["results"])
                report.errors.update(outcome["errors"])
            except Exception as exc:
                # Worker process died; mark the whole chunk as failed
                logger.error("Batch forecast chunk failed: %s", exc)
                for inputs in chunk:
                    report.errors[inputs.product_id] = f"{type(exc).__name__}: {exc}"

            done_count += len(chunk)
            if on_progress:
                on_progress(done_count)

    logger.info("Batch forecast finished: %d ok, %d failed", report.n_succeeded, report.n_failed)
    return report
