"""Core package: provides models, database records, settings, errors, and shared utilities."""

from .errors import NotificationNotFoundError, ValidationError  # noqa: F401
from .models import Notification, Transaction, TransactionCategory, TransactionType  # noqa: F401
from .settings import Settings  # noqa: F401
from .utils import get_logger  # noqa: F401
