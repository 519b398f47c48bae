"""
Custom exception classes for the workforce capability planner.

This module provides structured exception handling with:
- Base exception class for all planner errors
- Specific exception types for different failure modes
- Consistent error messaging and context preservation

Empty requirement sets and zero denominators are not errors: the analyzers
return defined fallback values for them instead of raising.
"""

from typing import Optional, Dict, Any


class WorkforcePlannerError(Exception):
    """
    Base exception for all workforce planner errors.

    Provides consistent error handling and context preservation
    across the matching and analysis engines.
    """

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code for programmatic handling
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.append(f"Error Code: {self.error_code}")
        if self.context:
            parts.append(f"Context: {self.context}")
        return " | ".join(parts)


class EntityNotFoundError(WorkforcePlannerError):
    """
    Raised when an analysis references an id that is not in the snapshot.

    Used for:
    - Unknown position id passed to employment analysis
    - Unknown position id passed to unmet-process lookup
    """

    def __init__(self, message: str, entity_type: Optional[str] = None, entity_id: Optional[Any] = None, **kwargs):
        context = create_error_context(entity_type=entity_type, entity_id=entity_id, **kwargs)
        super().__init__(message, error_code="NOT_FOUND", context=context)
        self.entity_type = entity_type
        self.entity_id = entity_id


class DataValidationError(WorkforcePlannerError):
    """
    Raised when data validation fails.

    Used for:
    - Skill levels outside the ordinal range
    - Snapshot tables that cannot be parsed
    - Records missing required fields
    """

    def __init__(self, message: str, data_source: Optional[str] = None, validation_type: Optional[str] = None, **kwargs):
        context = create_error_context(data_source=data_source, validation_type=validation_type, **kwargs)
        super().__init__(message, error_code="DATA_VALIDATION", context=context)


class ConfigurationError(WorkforcePlannerError):
    """
    Raised when configuration issues are detected.

    Used for:
    - Negative or non-numeric training cost per level
    - Unparsable environment settings
    """

    def __init__(self, message: str, config_file: Optional[str] = None, parameter: Optional[str] = None, **kwargs):
        context = create_error_context(config_file=config_file, parameter=parameter, **kwargs)
        super().__init__(message, error_code="CONFIGURATION", context=context)


class FileOperationError(WorkforcePlannerError):
    """
    Raised when file operations fail.

    Used for:
    - Missing snapshot directory
    - Snapshot table read failures
    - Report output directory issues
    """

    def __init__(self, message: str, file_path: Optional[str] = None, operation: Optional[str] = None, **kwargs):
        context = create_error_context(file_path=file_path, operation=operation, **kwargs)
        super().__init__(message, error_code="FILE_OPERATION", context=context)


# Utility functions for exception handling

def handle_file_operation(operation_name: str, file_path: str):
    """
    Decorator factory for handling file operations with consistent error handling.

    Args:
        operation_name: Description of the file operation
        file_path: Path to the file being operated on
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except FileNotFoundError as e:
                raise FileOperationError(
                    f"File not found during {operation_name}",
                    file_path=file_path,
                    operation=operation_name,
                    original_error=str(e)
                ) from e
            except PermissionError as e:
                raise FileOperationError(
                    f"Permission denied during {operation_name}",
                    file_path=file_path,
                    operation=operation_name,
                    original_error=str(e)
                ) from e
            except OSError as e:
                raise FileOperationError(
                    f"OS error during {operation_name}",
                    file_path=file_path,
                    operation=operation_name,
                    original_error=str(e)
                ) from e
        return wrapper
    return decorator


def create_error_context(**kwargs) -> Dict[str, Any]:
    """
    Create standardized error context dictionary.

    Args:
        **kwargs: Key-value pairs for context

    Returns:
        Dictionary with non-None values for error context
    """
    return {k: v for k, v in kwargs.items() if v is not None}
