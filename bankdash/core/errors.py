"""Error types raised by the ledger core."""


class ValidationError(ValueError):
    """Rejected input to a ledger operation (amount, description, category, type, severity)."""

    def __init__(self, field: str, message: str) -> None:
        """Store the offending field alongside the message."""
        super().__init__(message)
        self.field = field
        self.message = message


class NotificationNotFoundError(LookupError):
    """Raised when dismissing a notification id that the store does not hold."""

    def __init__(self, notification_id: str) -> None:
        """Remember the missing notification id."""
        super().__init__(f"Notification not found: {notification_id}")
        self.notification_id = notification_id
