from enum import StrEnum


class ConversionErrorType(StrEnum):
    UNRECOGNIZED_STATUS = "unrecognized_status"
    INVALID_TEST_CASE = "invalid_test_case"


class ConversionError(Exception):
    def __init__(
        self,
        error_type: ConversionErrorType,
        message: str,
        details: dict | None = None
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details or {}


class UnrecognizedStatusError(ConversionError):
    """Summary status outside the known set."""
    def __init__(
        self,
        raw_value: str,
    ):
        super().__init__(
            ConversionErrorType.UNRECOGNIZED_STATUS,
            f"Unknown status for '{raw_value}'",
            details={
                "raw_value": raw_value
            }
        )
        self.raw_value = raw_value


class InvalidTestCaseError(ConversionError):
    """Raised to the caller when a test case cannot be converted."""
    def __init__(
        self,
        message: str,
        name: str,
    ):
        super().__init__(
            ConversionErrorType.INVALID_TEST_CASE,
            message,
            details={
                "name": name
            }
        )
        self.name = name

    def __str__(self) -> str:
        return f"{self.message} (test case: {self.name})"
