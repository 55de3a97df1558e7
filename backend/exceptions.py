"""
Custom Exceptions - Application-specific error types
"""


class HabitTrackerException(Exception):
    """Base exception for all habit tracker errors"""
    pass


class StorageUnavailableError(HabitTrackerException):
    """Raised when the database file cannot be opened or its tables created"""
    pass
