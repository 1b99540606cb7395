from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import Party, get_party
from influencerflow.db.deps import get_session
from influencerflow.db.repositories.reports import ReportsRepository
from influencerflow.routers.contracts import get_party_contract
from influencerflow.schemas.reports import PerformanceReportOut

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/{contract_id}", response_model=list[PerformanceReportOut])
def list_contract_reports(
    contract_id: int,
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    contract = get_party_contract(contract_id, party, session)
    reports = ReportsRepository(session).list_for_contract(contract.id)
    return [PerformanceReportOut.model_validate(report) for report in reports]
