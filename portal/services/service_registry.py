"""Service wiring - one instance of each service per app, over a shared RepositoryFactory"""
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.services.account.account_service import AccountService
from portal.services.analytics.analytics_service import AnalyticsService
from portal.services.content.content_service import ContentService
from portal.services.dashboard.dashboard_service import DashboardService
from portal.services.institution.institution_service import InstitutionService
from portal.services.institution.settings_service import SettingsService
from portal.services.report.report_service import UserReportService
from portal.services.users.user_management_service import UserManagementService


class PortalServices:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory
        self.account = AccountService(repo_factory)
        self.institution = InstitutionService(repo_factory)
        self.dashboard = DashboardService(repo_factory)
        self.content = ContentService(repo_factory)
        self.users = UserManagementService(repo_factory)
        self.analytics = AnalyticsService(repo_factory)
        self.settings = SettingsService(repo_factory)
        self.reports = UserReportService(repo_factory)
