from repositories.admin_repository import AdminRepository
from repositories.report_repository import ReportRepository
from repositories.spot_repository import SpotRepository
from repositories.user_repository import UserRepository


class Backend:
    """
    Client for the data backend: one repository per document collection,
    all sharing the session handed in by the application factory.
    """

    def __init__(self, session):
        self.reports = ReportRepository(session)
        self.spots = SpotRepository(session)
        self.users = UserRepository(session)
        self.admins = AdminRepository(session)
