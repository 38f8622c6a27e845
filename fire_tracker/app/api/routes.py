"""HTTP routes for the Flask API."""

from __future__ import annotations

import math
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fire_tracker.core.aggregation import (
    dashboard_monthly_contribution,
    net_worth,
    projection_inputs,
    take_snapshot,
    total_assets,
    total_liabilities,
)
from fire_tracker.core.currency import convert_amount, get_exchange_rate
from fire_tracker.core.filters import (
    ChartFilters,
    filter_assets,
    filter_liabilities,
    filter_summary,
)
from fire_tracker.core.frequency import frequency_label, to_monthly
from fire_tracker.core.metrics import fire_metrics
from fire_tracker.core.milestones import (
    default_milestones,
    fire_milestone_cards,
    upcoming_milestones,
)
from fire_tracker.core.ping import get_ping_message
from fire_tracker.core.progress import baseline_from_history, progress_percent
from fire_tracker.core.projection import project
from fire_tracker.core.rates import ExchangeRateProvider
from fire_tracker.core.solver import contribution_needed, years_to_target
from fire_tracker.core.targets import fire_targets
from fire_tracker.schemas.fire import (
    ContributionRequest,
    ConvertRequest,
    DashboardResponse,
    MetricsRequest,
    MonthlyRequest,
    ProgressRequest,
    ProjectionRequest,
    ProjectionResponse,
    YearsRequest,
)
from fire_tracker.schemas.ping import PingResponse
from fire_tracker.schemas.records import (
    AssetInput,
    LiabilityInput,
    MilestoneInput,
    MilestoneUpdate,
    Settings,
    SettingsUpdate,
)
from fire_tracker.store import RecordNotFoundError, RecordStore

EXTENSION_KEY = "fire_tracker"

api_bp = Blueprint("api", __name__)


def _store() -> RecordStore:
    return current_app.extensions[EXTENSION_KEY]["store"]


def _rates() -> ExchangeRateProvider:
    return current_app.extensions[EXTENSION_KEY]["rates"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _dump(models) -> list:
    return [model.model_dump(mode="json") for model in models]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(RecordNotFoundError)
def _handle_not_found(exc: RecordNotFoundError):
    return jsonify({"detail": f"{exc.kind} {exc.record_id} not found"}), HTTPStatus.NOT_FOUND


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


# --------------------
# Pure calculations
# --------------------


@api_bp.post("/calc/convert")
def calc_convert() -> Any:
    payload = ConvertRequest.model_validate(_payload())
    amount = convert_amount(payload.amount, payload.fromCurrency, payload.toCurrency, payload.rate)
    return jsonify({"amount": amount, "currency": payload.toCurrency})


@api_bp.post("/calc/monthly")
def calc_monthly() -> Any:
    payload = MonthlyRequest.model_validate(_payload())
    return jsonify(
        {
            "monthly": to_monthly(payload.amount, payload.frequency),
            "label": frequency_label(payload.frequency),
        }
    )


@api_bp.post("/calc/targets")
def calc_targets() -> Any:
    settings = Settings.model_validate(_payload())
    return jsonify(fire_targets(settings).model_dump())


@api_bp.post("/calc/years")
def calc_years() -> Any:
    payload = YearsRequest.model_validate(_payload())
    years = years_to_target(
        payload.currentNetWorth,
        payload.monthlyContribution,
        payload.target,
        payload.annualReturn,
        payload.currentAge,
        payload.retirementAge,
    )
    reachable = not math.isinf(years)
    return jsonify({"years": years if reachable else None, "reachable": reachable})


@api_bp.post("/calc/contribution")
def calc_contribution() -> Any:
    payload = ContributionRequest.model_validate(_payload())
    monthly = contribution_needed(
        payload.currentNetWorth, payload.target, payload.years, payload.annualReturn
    )
    return jsonify({"monthlyContribution": monthly})


@api_bp.post("/calc/progress")
def calc_progress() -> Any:
    payload = ProgressRequest.model_validate(_payload())
    return jsonify({"progress": progress_percent(payload.current, payload.target, payload.baseline)})


@api_bp.post("/calc/projection")
def calc_projection() -> Any:
    payload = ProjectionRequest.model_validate(_payload())
    points = project(
        payload.startingValue,
        payload.monthlyContribution,
        payload.annualReturn,
        payload.currentAge,
        years=payload.years,
        retirement_age=payload.retirementAge,
        withdrawal_rate=payload.withdrawalRate,
        is_debt_only=payload.isDebtOnly,
        investment_return=payload.investmentReturn,
    )
    return jsonify(_dump(points))


@api_bp.post("/calc/metrics")
def calc_metrics() -> Any:
    payload = MetricsRequest.model_validate(_payload())
    metrics = fire_metrics(
        payload.currentNetWorth,
        payload.monthlyContribution,
        payload.settings,
        payload.history,
    )
    return jsonify(metrics.model_dump(mode="json"))


# --------------------
# Records
# --------------------


@api_bp.get("/assets")
def list_assets() -> Any:
    return jsonify(_dump(_store().assets()))


@api_bp.post("/assets")
def create_asset() -> Any:
    asset = _store().add_asset(AssetInput.model_validate(_payload()))
    return jsonify(asset.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.put("/assets/<record_id>")
def update_asset(record_id: str) -> Any:
    asset = _store().update_asset(record_id, AssetInput.model_validate(_payload()))
    return jsonify(asset.model_dump(mode="json"))


@api_bp.delete("/assets/<record_id>")
def delete_asset(record_id: str) -> Any:
    _store().delete_asset(record_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/liabilities")
def list_liabilities() -> Any:
    return jsonify(_dump(_store().liabilities()))


@api_bp.post("/liabilities")
def create_liability() -> Any:
    liability = _store().add_liability(LiabilityInput.model_validate(_payload()))
    return jsonify(liability.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.put("/liabilities/<record_id>")
def update_liability(record_id: str) -> Any:
    liability = _store().update_liability(record_id, LiabilityInput.model_validate(_payload()))
    return jsonify(liability.model_dump(mode="json"))


@api_bp.delete("/liabilities/<record_id>")
def delete_liability(record_id: str) -> Any:
    _store().delete_liability(record_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/settings")
def get_settings() -> Any:
    return jsonify(_store().settings().model_dump(mode="json"))


@api_bp.put("/settings")
def put_settings() -> Any:
    settings = _store().update_settings(SettingsUpdate.model_validate(_payload()))
    return jsonify(settings.model_dump(mode="json"))


@api_bp.get("/history")
def list_history() -> Any:
    history = sorted(_store().history(), key=lambda snapshot: snapshot.date)
    return jsonify(_dump(history))


@api_bp.post("/history")
def create_snapshot() -> Any:
    store = _store()
    settings = store.settings()
    snapshot = take_snapshot(
        store.assets(),
        store.liabilities(),
        settings,
        get_exchange_rate(settings.usdToNzdRate),
    )
    store.add_snapshot(snapshot)
    return jsonify(snapshot.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.get("/milestones")
def list_milestones() -> Any:
    return jsonify(_dump(_store().milestones()))


@api_bp.get("/milestones/defaults")
def list_default_milestones() -> Any:
    return jsonify(_dump(default_milestones(_store().settings())))


@api_bp.post("/milestones")
def create_milestone() -> Any:
    milestone = _store().add_milestone(MilestoneInput.model_validate(_payload()))
    return jsonify(milestone.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.put("/milestones/<record_id>")
def update_milestone(record_id: str) -> Any:
    milestone = _store().update_milestone(record_id, MilestoneUpdate.model_validate(_payload()))
    return jsonify(milestone.model_dump(mode="json"))


@api_bp.delete("/milestones/<record_id>")
def delete_milestone(record_id: str) -> Any:
    _store().delete_milestone(record_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.post("/milestones/<record_id>/achieve")
def achieve_milestone(record_id: str) -> Any:
    milestone = _store().achieve_milestone(record_id)
    return jsonify(milestone.model_dump(mode="json"))


@api_bp.post("/rates/refresh")
def refresh_rate() -> Any:
    """Fetch the live USD->NZD rate and remember it in settings."""
    result = _rates().fetch()
    _store().update_settings(
        {"usdToNzdRate": result.rate, "exchangeRateLastUpdated": result.timestamp}
    )
    return jsonify(
        {
            "rate": result.rate,
            "timestamp": result.timestamp.isoformat(),
            "fallback": result.fallback,
        }
    )


# --------------------
# Views over stored records
# --------------------


@api_bp.get("/dashboard")
def dashboard() -> Any:
    store = _store()
    settings = store.settings()
    assets = store.assets()
    liabilities = store.liabilities()
    history = store.history()
    rate = get_exchange_rate(settings.usdToNzdRate)

    current = net_worth(assets, liabilities, settings, rate)
    monthly = dashboard_monthly_contribution(assets, liabilities, settings, rate)
    metrics = fire_metrics(current, monthly, settings, history)
    baseline = baseline_from_history(history)

    response = DashboardResponse(
        currency=settings.currency,
        exchangeRate=rate,
        totalAssets=total_assets(assets, settings, rate),
        totalLiabilities=total_liabilities(liabilities),
        netWorth=current,
        monthlyContribution=monthly,
        baseline=baseline,
        metrics=metrics,
        fireMilestones=fire_milestone_cards(current, metrics, baseline),
        upcomingMilestones=upcoming_milestones(store.milestones(), current, baseline),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/projection")
def projection() -> Any:
    """Chart projection over stored records, optionally filtered."""
    filters = ChartFilters(
        assetTypes=request.args.getlist("assetType"),
        liabilityTypes=request.args.getlist("liabilityType"),
        selectedAssets=request.args.getlist("asset"),
        selectedLiabilities=request.args.getlist("liability"),
    )
    store = _store()
    settings = store.settings()
    assets = filter_assets(store.assets(), filters)
    liabilities = filter_liabilities(store.liabilities(), filters)
    rate = get_exchange_rate(settings.usdToNzdRate)

    inputs = projection_inputs(assets, liabilities, settings, rate)
    points = project(
        inputs.starting_value,
        inputs.monthly_contribution,
        inputs.annual_return,
        inputs.current_age,
        years=inputs.years,
        retirement_age=inputs.retirement_age,
        withdrawal_rate=inputs.withdrawal_rate,
        is_debt_only=inputs.is_debt_only,
        investment_return=inputs.investment_return,
    )
    targets = fire_targets(settings)

    response = ProjectionResponse(
        points=points,
        startingValue=inputs.starting_value,
        monthlyContribution=inputs.monthly_contribution,
        annualReturn=inputs.annual_return,
        isDebtOnly=inputs.is_debt_only,
        fireTarget=targets.fire,
        leanFire=targets.lean,
        fatFire=targets.fat,
        filterSummary=filter_summary(filters),
    )
    return jsonify(response.model_dump(mode="json"))
