"""Custom exceptions for the Renewable Energy Plant System."""

class REPSError(Exception):
    """Base exception for REPS errors."""
    pass

class SourceMismatchError(REPSError):
    """Exception raised when merging sources with different id or type."""
    pass

class StorageError(REPSError):
    """Base exception for persistence errors."""
    pass

class ParseError(StorageError):
    """Exception raised for malformed plant data files."""
    pass

class IOFailureError(StorageError):
    """Exception raised when the underlying file system fails."""
    pass

class ValidationError(REPSError):
    """Base exception for validation errors."""
    pass

class ValidationTypeError(ValidationError):
    """Exception raised for type validation errors."""
    pass

class ValidationRangeError(ValidationError):
    """Exception raised for range validation errors."""
    pass

class ConfigurationError(REPSError):
    """Exception raised for configuration errors."""
    pass
