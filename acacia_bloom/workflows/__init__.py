"""Workflows module."""
from .batch_forecast import BatchForecastReport, run_batch_forecast

__all__ = ['BatchForecastReport', 'run_batch_forecast']
