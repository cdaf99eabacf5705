"""
Acacia tree visualization state.

Purely presentational: derived from the finished prediction series and the
seasonal multipliers, never fed back into the numbers.
"""
from typing import Sequence

from ..config import DEFAULT_BASE_DEMAND
from ..domain.models import AcaciaVisualization, DemandPrediction, TreeState
from ..utils.rounding import round_half_up


# Upper bounds (exclusive) of demand intensity per tree state
TREE_STATE_THRESHOLDS = (
    (0.5, TreeState.SEEDLING),
    (0.8, TreeState.GROWING),
    (1.2, TreeState.BLOOMING),
    (1.8, TreeState.MATURE),
)


def tree_state_for(demand_intensity: float) -> TreeState:
    for upper, state in TREE_STATE_THRESHOLDS:
        if demand_intensity < upper:
            return state
    return TreeState.ABUNDANT


def seasonal_pattern_label(seasonal: Sequence[float]) -> str:
    if seasonal and seasonal[-1] > seasonal[0]:
        return "Spring Growth"
    return "Autumn Preparation"


def generate_acacia_visualization(
    predictions: Sequence[DemandPrediction],
    seasonal: Sequence[float],
    base_demand: float = DEFAULT_BASE_DEMAND,
) -> AcaciaVisualization:
    """
    Map aggregate demand intensity to the tree state and gauges.

    Args:
        predictions: Prediction series (non-empty)
        seasonal: Seasonal multiplier per day
        base_demand: Normalization reference

    Returns:
        AcaciaVisualization
    """
    average_demand = sum(p.predicted_demand for p in predictions) / len(predictions)
    demand_intensity = average_demand / base_demand if base_demand > 0 else 0.0

    leaf_count = min(100, round_half_up(demand_intensity * 50))

    seasonal_variation = (max(seasonal) - min(seasonal)) if seasonal else 0.0
    bloom_intensity = min(100, round_half_up(seasonal_variation * 100))

    return AcaciaVisualization(
        tree_state=tree_state_for(demand_intensity),
        leaf_count=leaf_count,
        bloom_intensity=bloom_intensity,
        seasonal_pattern=seasonal_pattern_label(seasonal),
    )
