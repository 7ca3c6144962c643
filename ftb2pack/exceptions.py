"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class FTB2PackError(Exception):
    """Base exception for all application-specific errors."""


class DescriptorFetchError(FTB2PackError):
    """Raised when modpack metadata cannot be retrieved or understood."""


class APIError(DescriptorFetchError):
    """Raised when the modpack API cannot be reached or answers with an error."""


class FormatError(DescriptorFetchError):
    """Raised when a document from the API does not match the expected shape."""


class CatalogFileError(DescriptorFetchError):
    """Raised when a local catalog file cannot be read."""


class ManifestError(FTB2PackError):
    """Raised when a manifest cannot be produced or persisted."""


class ServerInstallError(FTB2PackError):
    """Raised when the server installer binary cannot be downloaded."""


class ConfigurationError(FTB2PackError):
    """Raised for issues related to configuration loading or validation."""


class InstallInProgressError(FTB2PackError):
    """Raised when an install is requested while another one is still running."""


class SelectionError(FTB2PackError):
    """Raised when a requested modpack or version does not exist in the catalog."""


class DestinationError(FTB2PackError):
    """Raised when the install directory cannot be created."""
