"""Analytics package: confidence, visualization, insights and risk views of a forecast."""

from .confidence import ConfidenceScorer
from .visualization import generate_acacia_visualization
from .insights import generate_insights, generate_recommendations
from .risk import assess_risk_factors

__all__ = [
    "ConfidenceScorer",
    "generate_acacia_visualization",
    "generate_insights",
    "generate_recommendations",
    "assess_risk_factors",
]
