"""
This file contains custom, application-specific exceptions.
"""

class FinanceDataLoadError(Exception):
    """Raised when a finance collection cannot be read from the store."""
    def __init__(self, collection: str, reason: str = ""):
        self.collection = collection
        message = f"Unable to load '{collection}' from the store."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)

class DatabaseNotConfiguredError(Exception):
    """Raised when no database URL is configured for the current mode."""
    pass
