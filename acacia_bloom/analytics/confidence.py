"""
Forecast confidence scoring.

Resolution chain:
1. Base score: 70 with sufficient history (>= 7 records), else 30
2. History volatility (sufficient history only): CV < 0.2 → +15, CV > 0.5 → -20
3. Prediction stability: CV of the predicted series < 0.3 → +10
4. Missing optional inputs: -penalty for each absent weather/economic input
5. Clamp to [MIN_CONFIDENCE, MAX_CONFIDENCE]
"""

from typing import Any, Dict, Optional, Sequence

from ..config import MAX_CONFIDENCE, MIN_CONFIDENCE, get_numeric_setting
from ..domain.history import coefficient_of_variation
from ..domain.models import DemandPrediction, ForecastingInputs, HistoricalPatterns
from ..utils.rounding import round_half_up


class ConfidenceScorer:
    """Scores a forecast in [20, 95] from data quality and prediction stability."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Args:
            settings: Engine settings dict with a "confidence" section
                      (missing keys fall back to the documented defaults)
        """
        settings = settings or {}

        def _value(key: str, default: float) -> float:
            return get_numeric_setting(settings, "confidence", key, default)

        self.base_sufficient = _value("base_sufficient", 70)
        self.base_insufficient = _value("base_insufficient", 30)
        self.low_volatility_threshold = _value("low_volatility_threshold", 0.2)
        self.low_volatility_bonus = _value("low_volatility_bonus", 15)
        self.high_volatility_threshold = _value("high_volatility_threshold", 0.5)
        self.high_volatility_penalty = _value("high_volatility_penalty", 20)
        self.stable_prediction_threshold = _value("stable_prediction_threshold", 0.3)
        self.stable_prediction_bonus = _value("stable_prediction_bonus", 10)
        self.missing_input_penalty = _value("missing_input_penalty", 5)

    def score(
        self,
        patterns: HistoricalPatterns,
        predictions: Sequence[DemandPrediction],
        inputs: Optional[ForecastingInputs] = None,
    ) -> int:
        """
        Compute the confidence score.

        Args:
            patterns: Historical pattern summary
            predictions: Prediction series
            inputs: Forecasting inputs (used for the missing-input penalty)

        Returns:
            Integer confidence in [MIN_CONFIDENCE, MAX_CONFIDENCE]
        """
        if patterns.has_data:
            confidence = self.base_sufficient
            if patterns.volatility < self.low_volatility_threshold:
                confidence += self.low_volatility_bonus
            if patterns.volatility > self.high_volatility_threshold:
                confidence -= self.high_volatility_penalty
        else:
            confidence = self.base_insufficient

        prediction_cv = coefficient_of_variation([p.predicted_demand for p in predictions])
        if predictions and prediction_cv < self.stable_prediction_threshold:
            confidence += self.stable_prediction_bonus

        if inputs is not None:
            missing = sum(x is None for x in (inputs.weather_data, inputs.economic_indicators))
            confidence -= missing * self.missing_input_penalty

        return self._clamp(confidence)

    def _clamp(self, value: float) -> int:
        return round_half_up(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value)))
