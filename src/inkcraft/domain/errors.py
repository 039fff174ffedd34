"""Domain error hierarchy."""


class PortfolioError(Exception):
    """Base class for expected application failures."""

    message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class AuthError(PortfolioError):
    """Authentication failure."""


class InvalidPinError(AuthError):
    message = "Invalid PIN"


class UnauthenticatedError(AuthError):
    message = "Authentication required"


class AssetError(PortfolioError):
    """Failure while validating or storing an image."""


class UnsupportedTypeError(AssetError):
    message = "Unsupported file type"


class TooLargeError(AssetError):
    message = "File is too large"


class TooManyFilesError(AssetError):
    message = "Too many files in one upload"


class MissingRefError(AssetError):
    message = "publicId is required"


class MissingFileError(AssetError):
    message = "No file received"


class AssetStorageError(AssetError):
    message = "Asset storage operation failed"


class StoreError(PortfolioError):
    """Failure while reading or writing the record store."""


class StoreReadError(StoreError):
    message = "Failed to read the record store"


class StoreWriteError(StoreError):
    message = "Failed to write the record store"
