"""/v1/snapshot - read and mutate the stored financial snapshot"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from finx_gateway.api.v1.schemas import (
    ExpenseCreate,
    ExpenseSchema,
    LoanCreate,
    LoanSchema,
    OnboardingResponse,
    SnapshotResponse,
    SnapshotUpdate,
)
from finx_gateway.api.dependencies import get_request_id
from finx_gateway.infrastructure.database.session import get_db
from finx_gateway.infrastructure.database.repositories import StateRepository
from finx_gateway.domain.session import FinanceSession
from finx_gateway.domain.scoring import determine_risk_level
from finx_gateway.domain.exceptions import ExpenseNotFoundError, LoanNotFoundError
from finx_gateway.infrastructure.observability.metrics import record_snapshot_update
from finx_gateway.infrastructure.observability.logging import log_snapshot_update

router = APIRouter()


def _save(db: Session, repo: StateRepository, session: FinanceSession, operation: str, request_id: str) -> None:
    """Persist, commit, and record the mutation"""
    repo.save_session(session)
    db.commit()

    snapshot = session.snapshot
    record_snapshot_update(operation, snapshot.risk_score, determine_risk_level(snapshot.risk_score))
    log_snapshot_update(request_id, operation, snapshot.risk_score, snapshot.free_cash_flow)


@router.get("/snapshot", response_model=SnapshotResponse)
def get_snapshot(db: Session = Depends(get_db)):
    """Current snapshot (defaults if nothing is stored yet)"""
    session = StateRepository(db).load_session()
    return SnapshotResponse.from_domain(session.snapshot)


@router.put("/snapshot", response_model=SnapshotResponse)
def update_snapshot(request_body: SnapshotUpdate, request: Request, db: Session = Depends(get_db)):
    """
    Update raw input fields.

    Only the fields present in the body change; every derived field and the
    health score are recomputed before saving.
    """
    repo = StateRepository(db)
    session = repo.load_session()
    session.update(**request_body.model_dump(exclude_none=True))
    _save(db, repo, session, "update", get_request_id(request))
    return SnapshotResponse.from_domain(session.snapshot)


@router.delete("/snapshot", status_code=204)
def reset_snapshot(request: Request, db: Session = Depends(get_db)):
    """Discard the stored snapshot and achievements"""
    repo = StateRepository(db)
    repo.clear()
    db.commit()

    record_snapshot_update("reset", 0, determine_risk_level(0))
    logging.info("Snapshot reset", extra={"request_id": get_request_id(request), "step": "reset"})
    return Response(status_code=204)


@router.post("/snapshot/loans", response_model=LoanSchema, status_code=201)
def add_loan(request_body: LoanCreate, request: Request, db: Session = Depends(get_db)):
    """Add a loan; its monthly payment is fixed here and never recomputed"""
    repo = StateRepository(db)
    session = repo.load_session()
    loan = session.add_loan(
        name=request_body.name,
        amount=request_body.amount,
        interest_rate=request_body.interest_rate,
        duration=request_body.duration,
    )
    _save(db, repo, session, "add_loan", get_request_id(request))
    return LoanSchema(
        id=loan.id,
        name=loan.name,
        amount=loan.amount,
        interest_rate=loan.interest_rate,
        duration=loan.duration,
        monthly_payment=loan.monthly_payment,
    )


@router.delete("/snapshot/loans/{loan_id}", response_model=SnapshotResponse)
def remove_loan(loan_id: str, request: Request, db: Session = Depends(get_db)):
    repo = StateRepository(db)
    session = repo.load_session()
    try:
        session.remove_loan(loan_id)
    except LoanNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    _save(db, repo, session, "remove_loan", get_request_id(request))
    return SnapshotResponse.from_domain(session.snapshot)


@router.post("/snapshot/expenses", response_model=ExpenseSchema, status_code=201)
def add_expense(request_body: ExpenseCreate, request: Request, db: Session = Depends(get_db)):
    repo = StateRepository(db)
    session = repo.load_session()
    expense = session.add_expense(request_body.name, request_body.amount, request_body.icon)
    _save(db, repo, session, "add_expense", get_request_id(request))
    return ExpenseSchema(id=expense.id, name=expense.name, amount=expense.amount, icon=expense.icon)


@router.delete("/snapshot/expenses/{expense_id}", response_model=SnapshotResponse)
def remove_expense(expense_id: str, request: Request, db: Session = Depends(get_db)):
    repo = StateRepository(db)
    session = repo.load_session()
    try:
        session.remove_expense(expense_id)
    except ExpenseNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    _save(db, repo, session, "remove_expense", get_request_id(request))
    return SnapshotResponse.from_domain(session.snapshot)


@router.post("/onboarding/complete", response_model=OnboardingResponse)
def complete_onboarding(request: Request, db: Session = Depends(get_db)):
    """Mark onboarding finished and unlock the achievements it earns"""
    repo = StateRepository(db)
    session = repo.load_session()
    unlocked = session.complete_onboarding()
    _save(db, repo, session, "onboarding", get_request_id(request))
    return OnboardingResponse(unlocked=unlocked, snapshot=SnapshotResponse.from_domain(session.snapshot))
