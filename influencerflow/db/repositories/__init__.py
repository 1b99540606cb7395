from influencerflow.db.repositories.users import UsersRepository
from influencerflow.db.repositories.creators import CreatorsRepository
from influencerflow.db.repositories.brands import BrandsRepository
from influencerflow.db.repositories.campaigns import CampaignsRepository
from influencerflow.db.repositories.offers import OffersRepository
from influencerflow.db.repositories.contracts import ContractsRepository
from influencerflow.db.repositories.payments import PaymentsRepository
from influencerflow.db.repositories.reports import ReportsRepository
from influencerflow.db.repositories.dashboards import DashboardsRepository

__all__ = [
    "UsersRepository",
    "CreatorsRepository",
    "BrandsRepository",
    "CampaignsRepository",
    "OffersRepository",
    "ContractsRepository",
    "PaymentsRepository",
    "ReportsRepository",
    "DashboardsRepository",
]
