import logging
from collections.abc import Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field

from xcallure.allure.models import TestResult
from xcallure.config import ConverterSettings
from xcallure.convert.converter import convert
from xcallure.convert.errors import InvalidTestCaseError
from xcallure.convert.providers import HistoryIdProvider, ParametersProvider
from xcallure.xcresult.models import LazyAttachment, TestCase

logger = logging.getLogger(__name__)


class ConversionWarning(BaseModel):
    code: str
    message: str
    test_name: str | None = None


class ConvertedTest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    test: TestResult
    attachments: list[LazyAttachment] = Field(default_factory=list)


class BatchResult(BaseModel):
    results: list[ConvertedTest] = Field(default_factory=list)
    warnings: list[ConversionWarning] = Field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.warnings)


def convert_test_cases(
    test_cases: Iterable[TestCase],
    history_id_provider: HistoryIdProvider,
    parameters_provider: ParametersProvider,
    settings: ConverterSettings | None = None,
    uuid_factory: Callable[[], str] | None = None,
) -> BatchResult:
    """
    Convert test cases one by one, in input order.

    Each conversion is independent. A test case that cannot be converted
    is recorded as a warning and skipped, unless `settings.fail_fast` is
    set, in which case the error propagates.
    """

    settings = settings or ConverterSettings()
    batch = BatchResult()

    for test_case in test_cases:
        try:
            test, attachments = convert(
                test_case,
                history_id_provider,
                parameters_provider,
                uuid_factory=uuid_factory,
            )
        except InvalidTestCaseError as exc:
            if settings.fail_fast:
                raise
            logger.warning("Skipping test case %s: %s", exc.name, exc.message)
            batch.warnings.append(
                ConversionWarning(
                    code=exc.error_type.value,
                    message=exc.message,
                    test_name=exc.name,
                )
            )
            continue
        batch.results.append(ConvertedTest(test=test, attachments=attachments))

    logger.info(
        "Converted %d test case(s), %d skipped", len(batch.results), batch.failed
    )
    return batch
