"""Domain layer for admindash application."""

from admindash.domain.account import AccountService
from admindash.domain.admin import AdminService
from admindash.domain.api_key import ApiKeyService
from admindash.domain.app import AppService
from admindash.domain.budget import BudgetService
from admindash.domain.custom_domain import CustomDomainService
from admindash.domain.messaging import MessagingService
from admindash.domain.notification import NotificationService
from admindash.domain.task import TaskService
from admindash.domain.transaction import TransactionService

__all__ = [
    "AccountService",
    "AdminService",
    "ApiKeyService",
    "AppService",
    "BudgetService",
    "CustomDomainService",
    "MessagingService",
    "NotificationService",
    "TaskService",
    "TransactionService",
]
