"""Turn an activity tree into Allure steps."""

from datetime import datetime

from xcallure.allure.models import Attachment, Status, StatusDetails, StepResult
from xcallure.convert.annotations import is_annotation
from xcallure.xcresult.models import ActivityType, TestActivity, TestAttachment


def to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def make_attachment(attachment: TestAttachment) -> Attachment:
    return Attachment(name=attachment.name, source=attachment.name, type=None)


def _make_step(activity: TestActivity, substeps: list[StepResult]) -> StepResult:
    first_failed = next((s for s in substeps if s.status == Status.FAILED), None)

    if first_failed is not None:
        status = first_failed.status
        status_details = first_failed.status_details
    elif activity.activity_type == ActivityType.FAILURE:
        status = Status.FAILED
        status_details = StatusDetails(
            known=False,
            muted=False,
            flaky=False,
            message=activity.title,
            trace="",
        )
    else:
        status = Status.PASSED
        status_details = None

    start = to_millis(activity.started_time) if activity.started_time is not None else 0
    if activity.ended_time is not None:
        stop = to_millis(activity.ended_time)
    else:
        stop = start

    return StepResult(
        name=activity.title,
        status=status,
        status_details=status_details,
        steps=substeps,
        attachments=[make_attachment(a) for a in activity.attachments],
        parameters=[],
        start=start,
        stop=stop,
    )


def build_step(activity: TestActivity) -> StepResult | None:
    """
    Build the step for `activity` and everything below it.

    Annotation activities yield None and their subtrees are dropped whole,
    including any ordinary activities nested under them.

    A failed substep makes its parent fail with the same status details;
    the first failed substep in order wins. Otherwise an activity of type
    `failure` fails on its own with its title as the message.
    """

    if is_annotation(activity):
        return None

    # Pre-order flattening with parent links, then build bottom-up so deep
    # trees never touch the interpreter's recursion limit.
    nodes: list[TestActivity] = []
    children: list[list[int]] = []
    pending: list[tuple[TestActivity, int]] = [(activity, -1)]
    while pending:
        node, parent = pending.pop()
        index = len(nodes)
        nodes.append(node)
        children.append([])
        if parent >= 0:
            children[parent].append(index)
        for child in reversed(node.subactivities):
            if not is_annotation(child):
                pending.append((child, index))

    steps: list[StepResult | None] = [None] * len(nodes)
    for index in range(len(nodes) - 1, -1, -1):
        steps[index] = _make_step(nodes[index], [steps[c] for c in children[index]])
    return steps[0]


def build_steps(activities: list[TestActivity]) -> list[StepResult]:
    steps = []
    for activity in activities:
        step = build_step(activity)
        if step is not None:
            steps.append(step)
    return steps
