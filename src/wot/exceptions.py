"""Custom exception hierarchy for the wot package."""


class WotError(Exception):
    """Base exception for all wot errors."""


class ConfigurationError(WotError):
    """Missing or invalid configuration."""


class InvalidUrlError(ConfigurationError):
    """Entered value is not a TestOps instance URL."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"The entered string must be an http:// or https:// URL: '{value}'")


class InvalidTokenError(ConfigurationError):
    """API token is not a UUID."""

    def __init__(self) -> None:
        super().__init__("API token failed validation: a UUID is expected")


# --- HTTP layer errors ---


class ApiError(WotError):
    """Base error for Allure TestOps API interaction."""


class NetworkError(ApiError):
    """Transport failure: connection, DNS, timeout."""

    def __init__(self, detail: str, endpoint: str) -> None:
        self.detail = detail
        self.endpoint = endpoint
        super().__init__(f"Network error on {endpoint}: {detail}")


class ApiStatusError(ApiError):
    """Non-2xx response from Allure TestOps API."""

    def __init__(self, status_code: int, body: str, endpoint: str) -> None:
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        super().__init__(f"HTTP {status_code} from {endpoint}: {body[:500]}")


class DeserializationError(ApiError):
    """Response body does not match the expected JSON schema."""

    def __init__(self, detail: str, endpoint: str) -> None:
        self.detail = detail
        self.endpoint = endpoint
        super().__init__(f"Failed to deserialize response from {endpoint}: {detail}")


class UrlParseError(ApiError):
    """Request URL could not be built."""


class InvalidApiKeyError(ApiError):
    """API key contains characters not allowed in an HTTP header."""

    def __init__(self) -> None:
        super().__init__("Invalid API key: characters not allowed in an HTTP header")


# --- Local errors ---


class InvalidFileNameError(WotError):
    """No file name could be taken from the path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Could not get a file name from path: '{path}'")


class InvalidFileFormatError(WotError):
    """File is not a valid ZIP archive."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File '{path}' is not a valid ZIP archive")


class FileReadError(WotError):
    """File could not be read from disk."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Could not read file '{path}': {detail}")


class DirectoryNotFoundError(WotError):
    """Directory is missing or not readable."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Directory not found: <{path}>")


class ArchiveError(WotError):
    """Results archive could not be written."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Could not create archive '{path}': {detail}")


class CouldNotCreateFileError(WotError):
    """File could not be written to disk."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Could not create file '{path}': {detail}")


class InvalidTestFileNameError(WotError):
    """Generated test file name failed validation."""

    __test__ = False


# --- Domain errors ---


class ProjectNotFoundError(WotError):
    """No project with the given ID in TestOps."""

    def __init__(self, project_id: int) -> None:
        self.project_id = project_id
        super().__init__(f"Project with ID == {project_id} not found")


class TestCaseNotFoundError(WotError):
    """No test case with the given ID in TestOps."""

    __test__ = False

    def __init__(self, test_case_id: int) -> None:
        self.test_case_id = test_case_id
        super().__init__(f"Test case with ID == {test_case_id} not found")


class UploadCancelledByUser(WotError):
    """User declined the report upload (normal termination)."""

    def __init__(self) -> None:
        super().__init__("Upload cancelled by user")
