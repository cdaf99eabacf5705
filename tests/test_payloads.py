"""
Tests for the JSON payload codec (acacia_bloom/payloads.py).
"""

import json
import pytest
from datetime import date, datetime

from acacia_bloom.domain.models import Season, SocialEventType
from acacia_bloom.engine import generate_forecast
from acacia_bloom.payloads import forecast_result_to_dict, forecasting_inputs_from_dict, parse_date


def _payload(**overrides):
    payload = {
        "productId": "MAIZE-2KG",
        "productCategory": "maize",
        "historicalSales": [
            {"date": f"2026-06-{day:02d}", "quantity": 40 + day, "price": 180, "location": "Nakuru"}
            for day in range(1, 11)
        ],
        "weatherData": {"temperature": 26, "rainfall": 2, "humidity": 45, "season": "dry"},
        "socialEvents": [
            {"name": "Christmas", "type": "holiday", "impact": 1.5,
             "startDate": "2026-12-24", "endDate": "2026-12-26"},
        ],
        "economicIndicators": {"inflationRate": 0.07, "unemploymentRate": 0.1,
                               "currencyRate": 129, "fuelPrice": 175},
        "location": {"county": "Nakuru", "isUrban": False, "population": 570000},
    }
    payload.update(overrides)
    return payload


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("2026-07-01") == date(2026, 7, 1)

    def test_iso_datetime_string(self):
        assert parse_date("2026-07-01T08:30:00Z") == date(2026, 7, 1)

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2026, 7, 1)) == date(2026, 7, 1)
        assert parse_date(datetime(2026, 7, 1, 9, 0)) == date(2026, 7, 1)

    def test_invalid_string(self):
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            parse_date("01/07/2026")

    def test_invalid_type(self):
        with pytest.raises(TypeError):
            parse_date(20260701)


class TestForecastingInputsFromDict:
    def test_full_payload(self):
        inputs = forecasting_inputs_from_dict(_payload())

        assert inputs.product_id == "MAIZE-2KG"
        assert len(inputs.historical_sales) == 10
        assert inputs.historical_sales[0].date == date(2026, 6, 1)
        assert inputs.weather_data.season == Season.DRY
        assert inputs.social_events[0].type == SocialEventType.HOLIDAY
        assert inputs.social_events[0].end_date == date(2026, 12, 26)
        assert inputs.economic_indicators.currency_rate == pytest.approx(129.0)
        assert inputs.location.population == 570000

    def test_optional_sections_absent(self):
        payload = _payload()
        for key in ("weatherData", "socialEvents", "economicIndicators", "historicalSales"):
            del payload[key]

        inputs = forecasting_inputs_from_dict(payload)

        assert inputs.weather_data is None
        assert inputs.social_events is None
        assert inputs.economic_indicators is None
        assert inputs.historical_sales == ()

    def test_kenya_shilling_rate_alias(self):
        economic = {"inflationRate": 0.07, "unemploymentRate": 0.1, "kenyaShillingRate": 140, "fuelPrice": 175}
        inputs = forecasting_inputs_from_dict(_payload(economicIndicators=economic))

        assert inputs.economic_indicators.currency_rate == pytest.approx(140.0)

    def test_missing_currency_rate(self):
        economic = {"inflationRate": 0.07, "unemploymentRate": 0.1, "fuelPrice": 175}
        with pytest.raises(KeyError, match="currencyRate"):
            forecasting_inputs_from_dict(_payload(economicIndicators=economic))

    def test_missing_location(self):
        payload = _payload()
        del payload["location"]
        with pytest.raises(KeyError):
            forecasting_inputs_from_dict(payload)

    def test_unknown_season(self):
        with pytest.raises(ValueError):
            forecasting_inputs_from_dict(_payload(weatherData={"season": "monsoon"}))

    def test_impact_out_of_range(self):
        events = [{"name": "Sale", "impact": 3.0, "startDate": "2026-07-01", "endDate": "2026-07-02"}]
        with pytest.raises(ValueError, match="impact"):
            forecasting_inputs_from_dict(_payload(socialEvents=events))

    @pytest.mark.parametrize("is_urban", ["false", "true", 0, None])
    def test_is_urban_must_be_boolean(self, is_urban):
        location = {"county": "Nakuru", "isUrban": is_urban}
        with pytest.raises(ValueError, match="isUrban must be true or false"):
            forecasting_inputs_from_dict(_payload(location=location))

    def test_nan_quantity_rejected(self):
        sales = [{"date": "2026-06-01", "quantity": float("nan")}]
        with pytest.raises(ValueError, match="Sales quantity must be a finite number"):
            forecasting_inputs_from_dict(_payload(historicalSales=sales))


class TestForecastResultToDict:
    @pytest.fixture
    def document(self):
        inputs = forecasting_inputs_from_dict(_payload())
        result = generate_forecast(inputs, forecast_days=7, today=date(2026, 7, 1))
        return forecast_result_to_dict(result)

    def test_json_serializable(self, document):
        assert json.loads(json.dumps(document)) == document

    def test_camel_case_keys(self, document):
        assert set(document) == {
            "predictions", "confidence", "acaciaVisualization", "insights",
            "recommendations", "riskFactors",
        }
        assert set(document["predictions"][0]) == {"date", "predictedDemand", "confidenceInterval", "factors"}

    def test_display_values_are_integers(self, document):
        first = document["predictions"][0]

        assert first["date"] == "2026-07-01"
        assert isinstance(first["predictedDemand"], int)
        assert isinstance(first["confidenceInterval"]["low"], int)
        assert all(isinstance(v, int) for v in first["factors"].values())

    def test_seasonal_factor_rounded(self, document):
        # July maize: 1.4 × 1.1 = 1.54 → +54%
        assert document["predictions"][0]["factors"]["seasonal"] == 54

    def test_enums_serialized_as_values(self, document):
        assert document["acaciaVisualization"]["treeState"] in {
            "seedling", "growing", "blooming", "mature", "abundant",
        }
        assert all(isinstance(d, str) for d in document["recommendations"]["orderTiming"])
