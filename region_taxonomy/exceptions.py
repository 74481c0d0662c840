"""
Custom exception classes for the region taxonomy library.

This module defines the exception hierarchy raised while loading region data,
merging overlay datasets and resolving localized names.
"""

from typing import Optional, List, Dict, Any


class RegionTaxonomyError(Exception):
    """Base exception class for all region taxonomy errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base taxonomy error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class ValidationError(RegionTaxonomyError):
    """Exception raised for data validation errors."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Any = None, validation_rules: Optional[List[str]] = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            field_name: Name of the field that failed validation
            invalid_value: The invalid value that caused the error
            validation_rules: List of validation rules that were violated
        """
        context = {
            'field_name': field_name,
            'invalid_value': str(invalid_value) if invalid_value is not None else None,
            'validation_rules': validation_rules or []
        }
        super().__init__(message, error_code='VALIDATION_ERROR', context=context)
        self.field_name = field_name
        self.invalid_value = invalid_value
        self.validation_rules = validation_rules or []


class RecordValidationError(ValidationError):
    """Exception raised when an overlay record is rejected in strict key mode."""

    def __init__(self, message: str, record: Optional[Dict[str, Any]] = None,
                 file_path: Optional[str] = None):
        super().__init__(
            message,
            field_name='code',
            invalid_value=record,
            validation_rules=['natural_key_required']
        )
        self.context['file_path'] = file_path
        self.record = record or {}
        self.file_path = file_path


class DataLoadError(RegionTaxonomyError):
    """Exception raised when a region data file cannot be parsed."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        """
        Initialize data load error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='DATA_LOAD_ERROR', context=context)
        self.file_path = file_path
        self.original_error = original_error


class FileAccessError(RegionTaxonomyError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, list, etc.)
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigurationError(RegionTaxonomyError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


class MissingTranslationError(RegionTaxonomyError):
    """Exception raised when a localized string cannot be resolved."""

    def __init__(self, path: str, locale: Optional[str] = None,
                 fallback_locale: Optional[str] = None):
        """
        Initialize missing translation error.

        Args:
            path: Dotted translation path that was looked up
            locale: Active locale at lookup time
            fallback_locale: Fallback locale that was also tried, if any
        """
        message = f"Translation missing: {locale}.{path}" if locale else f"Translation missing: {path}"
        context = {
            'path': path,
            'locale': locale,
            'fallback_locale': fallback_locale
        }
        super().__init__(message, error_code='MISSING_TRANSLATION', context=context)
        self.path = path
        self.locale = locale
        self.fallback_locale = fallback_locale


class RegionNotFoundError(RegionTaxonomyError, KeyError):
    """Exception raised when a region lookup by code or path has no result."""

    def __init__(self, message: str, code: Optional[str] = None,
                 parent_path: Optional[str] = None):
        context = {
            'code': code,
            'parent_path': parent_path
        }
        super().__init__(message, error_code='REGION_NOT_FOUND', context=context)
        self.code = code
        self.parent_path = parent_path


# Utility functions for exception handling

def create_file_error(operation: str, file_path: str, original_error: Exception) -> FileAccessError:
    """
    Create a standardized file access error.

    Args:
        operation: Type of file operation that failed
        file_path: Path to the file
        original_error: Original exception

    Returns:
        FileAccessError instance
    """
    message = f"Failed to {operation} file '{file_path}': {str(original_error)}"

    return FileAccessError(
        message=message,
        file_path=file_path,
        operation=operation,
        original_error=original_error
    )


def create_record_validation_error(record: Dict[str, Any],
                                   file_path: Optional[str] = None) -> RecordValidationError:
    """
    Create a standardized error for an overlay record without a natural key.

    Args:
        record: The offending overlay record
        file_path: Relative path of the overlay file, if known

    Returns:
        RecordValidationError instance
    """
    location = f" in '{file_path}'" if file_path else ""
    message = (
        f"Overlay record{location} has neither 'code' nor 'alpha_2_code': {record}"
    )
    return RecordValidationError(message, record=record, file_path=file_path)


def get_error_severity(error: Exception) -> str:
    """
    Get the severity level of an error.

    Args:
        error: Exception to evaluate

    Returns:
        Severity level string (low, medium, high, critical)
    """
    if isinstance(error, ConfigurationError):
        return 'critical'
    elif isinstance(error, (DataLoadError, FileAccessError, MissingTranslationError)):
        return 'high'
    elif isinstance(error, ValidationError):
        return 'medium'
    elif isinstance(error, RegionNotFoundError):
        return 'low'
    else:
        return 'medium'
