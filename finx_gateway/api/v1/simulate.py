"""POST /v1/simulate - what-if scenario comparison"""

import time
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from finx_gateway.api.v1.schemas import ScenarioRequest, ScenarioResponse
from finx_gateway.api.dependencies import get_request_id
from finx_gateway.infrastructure.database.session import get_db
from finx_gateway.infrastructure.database.repositories import StateRepository
from finx_gateway.domain.models import (
    CashReallocation,
    ExpenseAdjustment,
    HousingChange,
    IncomeChange,
    NewLoanScenario,
)
from finx_gateway.domain.simulator import ScenarioType, compare_scenario
from finx_gateway.infrastructure.observability.metrics import simulation_counter
from finx_gateway.infrastructure.observability.logging import log_simulation

router = APIRouter()

SCENARIO_PARAMS = {
    ScenarioType.EXPENSE_ADJUSTMENT.value: ExpenseAdjustment,
    ScenarioType.CASH_REALLOCATION.value: CashReallocation,
    ScenarioType.NEW_LOAN.value: NewLoanScenario,
    ScenarioType.HOUSING_CHANGE.value: HousingChange,
    ScenarioType.INCOME_CHANGE.value: IncomeChange,
}


@router.post("/simulate", response_model=ScenarioResponse)
def simulate_scenario(
    request: Request,
    request_body: ScenarioRequest = Body(...),
    db: Session = Depends(get_db),
):
    """
    Run one scenario against the stored snapshot.

    The stored snapshot is read only; nothing is saved.
    """
    start_time = time.time()

    baseline = StateRepository(db).load_session().snapshot
    params_cls = SCENARIO_PARAMS[request_body.scenario]
    params = params_cls(**request_body.model_dump(exclude={"scenario"}))

    comparison = compare_scenario(baseline, params)

    duration_ms = (time.time() - start_time) * 1000
    simulation_counter.labels(scenario=comparison.scenario).inc()
    log_simulation(get_request_id(request), comparison.scenario, comparison.risk_score_delta, duration_ms)

    return ScenarioResponse.from_domain(comparison)
