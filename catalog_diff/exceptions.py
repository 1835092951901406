# catalog_diff/exceptions.py


class ConfigurationError(Exception):
    """Raised when a required setting (lookup service, webhook) is missing or invalid."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class CatalogLookupError(Exception):
    """Raised when the catalog lookup service cannot be reached or returns a bad payload."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class RowSourceError(Exception):
    """Raised when a snapshot export cannot be read (missing file, unsupported format)."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotificationError(Exception):
    """Raised when the notification webhook rejects a message."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message
