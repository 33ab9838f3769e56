from xcallure.convert.annotations import (
    ANNOTATION_PREFIXES,
    AnnotationResult,
    AnnotationState,
    extract_annotations,
    is_annotation,
    iter_activities,
    parse_annotation,
)
from xcallure.convert.batch import (
    BatchResult,
    ConversionWarning,
    ConvertedTest,
    convert_test_cases,
)
from xcallure.convert.converter import convert, make_status
from xcallure.convert.errors import (
    ConversionError,
    ConversionErrorType,
    InvalidTestCaseError,
    UnrecognizedStatusError,
)
from xcallure.convert.providers import (
    DestinationParametersProvider,
    HistoryIdProvider,
    IdentifierHistoryIdProvider,
    NoParametersProvider,
    ParametersProvider,
)
from xcallure.convert.steps import build_step, build_steps

__all__ = [
    "ANNOTATION_PREFIXES",
    "AnnotationResult",
    "AnnotationState",
    "extract_annotations",
    "is_annotation",
    "iter_activities",
    "parse_annotation",
    "BatchResult",
    "ConversionWarning",
    "ConvertedTest",
    "convert_test_cases",
    "convert",
    "make_status",
    "ConversionError",
    "ConversionErrorType",
    "InvalidTestCaseError",
    "UnrecognizedStatusError",
    "DestinationParametersProvider",
    "HistoryIdProvider",
    "IdentifierHistoryIdProvider",
    "NoParametersProvider",
    "ParametersProvider",
    "build_step",
    "build_steps",
]
