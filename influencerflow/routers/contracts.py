import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import Party, get_party
from influencerflow.config import settings
from influencerflow.db.deps import get_session
from influencerflow.db.models import Contract
from influencerflow.db.repositories.contracts import ContractsRepository
from influencerflow.db.repositories.offers import OffersRepository
from influencerflow.domain import lifecycle
from influencerflow.schemas.contracts import ContractCreate, ContractOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["contracts"])


def get_party_contract(contract_id: int, party: Party, session: Session) -> Contract:
    contract = ContractsRepository(session).get(contract_id)
    if not contract:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contract not found")
    if not party.owns_offer(contract.offer):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a party to this contract")
    return contract


@router.get("", response_model=list[ContractOut])
def list_contracts(
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    repo = ContractsRepository(session)
    if party.is_brand:
        contracts = repo.list_for_brand(party.brand.id)
    else:
        contracts = repo.list_for_creator(party.creator.id)
    return [ContractOut.model_validate(contract) for contract in contracts]


@router.get("/{contract_id}", response_model=ContractOut)
def get_contract(
    contract_id: int,
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    return ContractOut.model_validate(get_party_contract(contract_id, party, session))


@router.post("", response_model=ContractOut, status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreate,
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    offer = OffersRepository(session).get(payload.offer_id)
    if not offer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Offer not found")
    if not party.owns_offer(offer):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a party to this offer")

    final_amount = payload.final_amount
    if final_amount is None:
        final_amount = lifecycle.resolve_final_amount(offer.status, offer.amount, offer.counter_amount)
    contract, payment = ContractsRepository(session).create_with_payment(
        offer_id=offer.id,
        final_amount=final_amount,
        terms=payload.terms or settings.DEFAULT_CONTRACT_TERMS,
        due_date=lifecycle.payment_due_date(due_days=settings.PAYMENT_DUE_DAYS),
        pdf_url=payload.pdf_url,
    )
    logger.info(
        "Created contract",
        extra={
            "contract_id": contract.id,
            "offer_id": offer.id,
            "payment_id": payment.id,
            "final_amount": str(contract.final_amount),
        },
    )
    return ContractOut.model_validate(contract)


@router.patch("/{contract_id}/sign", response_model=ContractOut)
def sign_contract(
    contract_id: int,
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    contract = get_party_contract(contract_id, party, session)
    contract = ContractsRepository(session).sign(contract, party.role, signed_at=lifecycle.utcnow())
    logger.info(
        "Contract signed",
        extra={
            "contract_id": contract.id,
            "role": party.role.value,
            "signature_status": contract.signature_status,
        },
    )
    return ContractOut.model_validate(contract)
