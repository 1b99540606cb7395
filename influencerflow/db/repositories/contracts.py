from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select

from influencerflow.db.enums import UserRoleEnum
from influencerflow.db.models import Campaign, Contract, Offer, Payment
from influencerflow.db.repositories.base import Repository


class ContractsRepository(Repository):
    def list_for_creator(self, creator_id: int) -> List[Contract]:
        stmt = (
            select(Contract)
            .join(Offer, Contract.offer_id == Offer.id)
            .where(Offer.creator_id == creator_id)
            .order_by(Contract.created_at.desc(), Contract.id.desc())
        )
        return list(self.session.scalars(stmt).all())

    def list_for_brand(self, brand_id: int) -> List[Contract]:
        stmt = (
            select(Contract)
            .join(Offer, Contract.offer_id == Offer.id)
            .join(Campaign, Offer.campaign_id == Campaign.id)
            .where(Campaign.brand_id == brand_id)
            .order_by(Contract.created_at.desc(), Contract.id.desc())
        )
        return list(self.session.scalars(stmt).all())

    def get(self, contract_id: int) -> Optional[Contract]:
        return self.session.get(Contract, contract_id)

    def create_with_payment(
        self,
        offer_id: int,
        final_amount,
        terms: str,
        due_date: datetime,
        pdf_url: Optional[str] = None,
    ) -> Tuple[Contract, Payment]:
        """Insert a contract and its pending payment in one transaction."""
        contract = Contract(offer_id=offer_id, final_amount=final_amount, terms=terms, pdf_url=pdf_url)
        self.session.add(contract)
        self.session.flush()
        payment = Payment(contract_id=contract.id, amount=final_amount, due_date=due_date)
        self.session.add(payment)
        self.session.commit()
        self.session.refresh(contract)
        self.session.refresh(payment)
        return contract, payment

    def sign(self, contract: Contract, role: UserRoleEnum, signed_at: datetime) -> Contract:
        if role == UserRoleEnum.creator:
            return self.apply(contract, creator_signed=True, creator_signed_at=signed_at)
        return self.apply(contract, brand_signed=True, brand_signed_at=signed_at)
