from founderhq.models.financial_models import Runway
from founderhq.services.health_service import evaluate_health
from founderhq.services.metrics_service import (
    cac_payback_months,
    calculate_runway,
    ltv_cac_ratio,
)


def test_all_healthy_signals():
    report = evaluate_health(Runway(months=18), ltv_cac=4.2, cac_payback=6, growth_rate=35)

    assert report.warnings == []
    assert report.successes == [
        "Healthy runway: 18 months",
        "Strong LTV:CAC ratio: 4.2x",
        "Good CAC payback: 6 months",
        "Strong growth: 35.0% QoQ",
    ]


def test_all_warning_signals():
    report = evaluate_health(Runway(months=2.5), ltv_cac=1.5, cac_payback=14.2, growth_rate=-5)

    assert report.successes == []
    assert report.warnings == [
        "Low runway: only 2 months remaining",
        "LTV:CAC ratio below 3x (currently 1.5x)",
        "Long CAC payback: 14 months",
        "Negative growth: -5.0% QoQ",
    ]


def test_conflicting_signals_are_all_reported():
    report = evaluate_health(Runway(months=1), ltv_cac=5, cac_payback=20, growth_rate=50)
    assert len(report.warnings) == 2
    assert len(report.successes) == 2


def test_middle_values_and_na_produce_no_message():
    report = evaluate_health(Runway(months=6), ltv_cac=None, cac_payback=None, growth_rate=10)
    assert report.is_empty


def test_infinite_runway_is_healthy():
    report = evaluate_health(Runway(months=float("inf"), is_infinite=True), None, None, 0)
    assert report.successes == ["Healthy runway: no net burn"]


def test_no_acquisitions_gives_no_unit_economics_signal():
    cac = 0.0
    report = evaluate_health(
        calculate_runway(1000, 100),
        ltv_cac_ratio(1200, cac),
        cac_payback_months(cac, 5000),
        5.0,
    )
    assert report.is_empty


def test_zero_ltv_with_acquisition_spend_warns():
    report = evaluate_health(Runway(months=6), ltv_cac=ltv_cac_ratio(0, 400), cac_payback=None, growth_rate=10)
    assert report.warnings == ["LTV:CAC ratio below 3x (currently 0.0x)"]
    assert report.successes == []
