"""Convert Xcode test activity trees into Allure results."""

from xcallure.convert import (
    ConversionError,
    InvalidTestCaseError,
    UnrecognizedStatusError,
    convert,
    convert_test_cases,
)
from xcallure.logging import get_logger, setup_logging

__all__ = [
    "ConversionError",
    "InvalidTestCaseError",
    "UnrecognizedStatusError",
    "convert",
    "convert_test_cases",
    "get_logger",
    "setup_logging",
]
