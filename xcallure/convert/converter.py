import logging
import uuid
from collections.abc import Callable

from xcallure.allure.models import Status, TestResult
from xcallure.convert.annotations import extract_annotations
from xcallure.convert.errors import InvalidTestCaseError, UnrecognizedStatusError
from xcallure.convert.providers import HistoryIdProvider, ParametersProvider
from xcallure.convert.steps import build_steps, to_millis
from xcallure.xcresult.models import LazyAttachment, TestCase, TestStatus, TestSummary

logger = logging.getLogger(__name__)

STATUS_MAP: dict[str, Status] = {
    TestStatus.SUCCESS: Status.PASSED,
    TestStatus.FAILURE: Status.FAILED,
    TestStatus.SKIPPED: Status.SKIPPED,
    TestStatus.EXPECTED_FAILURE: Status.PASSED,
}


def _new_uuid() -> str:
    return str(uuid.uuid4()).lower()


def make_status(summary: TestSummary) -> Status:
    try:
        return STATUS_MAP[summary.status]
    except KeyError:
        raise UnrecognizedStatusError(summary.status) from None


def convert(
    test_case: TestCase,
    history_id_provider: HistoryIdProvider,
    parameters_provider: ParametersProvider,
    uuid_factory: Callable[[], str] | None = None,
) -> tuple[TestResult, list[LazyAttachment]]:
    """
    Convert one test case into an Allure result.

    Returns the result together with the test case's own attachments,
    still unread. Attachments of individual activities are already part
    of the steps.

    Raises:
        InvalidTestCaseError: the summary status is not one we know.
    """

    summary = test_case.summary
    result_uuid = (uuid_factory or _new_uuid)()

    steps = build_steps(test_case.activities)

    starts = [s.start for s in steps if s.start > 0]
    stops = [s.stop for s in steps if s.stop > 0]
    start = min(starts) if starts else to_millis(test_case.test_run.started_time)
    stop = max(stops) if stops else start + int(summary.duration * 1000)

    parameters = parameters_provider.make_parameters(test_case)
    status_details = next(
        (s.status_details for s in steps if s.status == Status.FAILED), None
    )
    history_id = history_id_provider.make_history_id(test_case)
    annotations = extract_annotations(test_case)

    try:
        status = make_status(summary)
    except UnrecognizedStatusError as exc:
        logger.debug("Rejecting test case %s: %s", summary.name, exc.message)
        raise InvalidTestCaseError(exc.message, name=summary.name) from exc

    test = TestResult(
        uuid=result_uuid,
        history_id=history_id,
        test_case_id=annotations.test_case_id,
        test_case_name=None,
        full_name=summary.identifier,
        labels=annotations.labels,
        links=annotations.links,
        name=annotations.name if annotations.name is not None else summary.name,
        status=status,
        status_details=status_details,
        stage=None,
        description=annotations.description,
        description_html=None,
        steps=steps,
        attachments=[],
        parameters=parameters,
        start=start,
        stop=stop,
    )

    logger.debug(
        "Converted %s: status=%s steps=%d labels=%d links=%d",
        summary.identifier,
        test.status,
        len(steps),
        len(test.labels),
        len(test.links),
    )
    return test, list(test_case.attachments)
