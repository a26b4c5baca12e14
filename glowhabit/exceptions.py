"""
Custom Exception Classes

Provides specific exception types for better error handling and caller feedback.
"""


class GlowHabitException(Exception):
    """Base exception for all GlowHabit errors"""
    pass


class EntityNotFoundError(GlowHabitException):
    """Raised when a habit, goal, routine or entry does not exist"""
    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} '{identifier}' not found")


class ValidationError(GlowHabitException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation error for '{field}': {message}")


class DuplicateError(GlowHabitException):
    """Raised when trying to create a duplicate record"""
    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"Duplicate {resource_type}: '{identifier}' already exists")


class StorageError(GlowHabitException):
    """Raised when a store cannot be written"""
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Storage error for '{key}': {reason}")


class AnalyticsError(GlowHabitException):
    """Raised when analytics computation fails"""
    def __init__(self, metric: str, reason: str):
        self.metric = metric
        self.reason = reason
        super().__init__(f"Analytics error for '{metric}': {reason}")


class SuggestionServiceError(GlowHabitException):
    """Raised when the remote suggestion endpoint cannot be used"""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Suggestion service unavailable: {reason}")
