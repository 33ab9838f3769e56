from datetime import datetime, timedelta, timezone

from xcallure.allure.models import Attachment, Status, StatusDetails
from xcallure.convert.steps import build_step, build_steps, to_millis
from xcallure.xcresult.models import ActivityType, TestActivity, TestAttachment

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T0_MS = 1704067200000


def activity(title: str, *children: TestActivity, **kwargs) -> TestActivity:
    return TestActivity(title=title, subactivities=list(children), **kwargs)


def failure(title: str, *children: TestActivity) -> TestActivity:
    return activity(title, *children, activity_type=ActivityType.FAILURE)


def shape(step) -> tuple:
    return (step.name, [shape(s) for s in step.steps])


def test_to_millis():
    assert to_millis(T0) == T0_MS
    assert to_millis(T0 + timedelta(milliseconds=1500)) == T0_MS + 1500


def test_step_tree_mirrors_activity_tree():
    root = activity(
        "Open app",
        activity("Launch", activity("Wait for splash")),
        activity("Tap login"),
        activity("Assert home"),
    )
    step = build_step(root)
    assert shape(step) == (
        "Open app",
        [
            ("Launch", [("Wait for splash", [])]),
            ("Tap login", []),
            ("Assert home", []),
        ],
    )


def test_annotation_activity_has_no_step():
    assert build_step(activity("allure.label.owner: bob")) is None


def test_annotation_child_is_pruned():
    root = activity(
        "Open app",
        activity("allure.id:42"),
        activity("Tap login"),
        activity("allure.label.nocolon"),
    )
    step = build_step(root)
    assert [s.name for s in step.steps] == ["Tap login"]


def test_annotation_prunes_real_children_too():
    root = activity(
        "Open app",
        activity("allure.name:Login", activity("Tap login", activity("Tap again"))),
    )
    step = build_step(root)
    assert step.steps == []


def test_passed_when_no_failure():
    step = build_step(activity("Parent", activity("a"), activity("b")))
    assert step.status == Status.PASSED
    assert step.status_details is None
    assert all(s.status == Status.PASSED for s in step.steps)


def test_failure_leaf_synthesizes_details():
    step = build_step(failure("XCTAssertEqual failed"))
    assert step.status == Status.FAILED
    assert step.status_details == StatusDetails(
        known=False,
        muted=False,
        flaky=False,
        message="XCTAssertEqual failed",
        trace="",
    )


def test_parent_inherits_failed_child_details():
    root = activity(
        "Parent",
        activity("ok"),
        failure("boom"),
        activity("ok again"),
    )
    step = build_step(root)
    assert step.status == Status.FAILED
    assert step.status_details == step.steps[1].status_details
    assert step.status_details.message == "boom"


def test_first_failed_child_wins():
    root = activity("Parent", failure("first"), failure("second"))
    step = build_step(root)
    assert step.status_details.message == "first"


def test_child_failure_takes_precedence_over_own_failure_type():
    root = failure("Parent failure", failure("child failure"))
    step = build_step(root)
    assert step.status_details.message == "child failure"


def test_failure_propagates_through_levels():
    root = activity("Top", activity("Middle", activity("ok"), failure("deep")))
    step = build_step(root)
    assert step.status == Status.FAILED
    assert step.steps[0].status == Status.FAILED
    assert step.status_details.message == "deep"


def test_attachments_have_name_as_source_and_no_type():
    root = activity(
        "Screenshot",
        attachments=[
            TestAttachment(name="Screenshot 1", filename="shot_1.png"),
            TestAttachment(name="log.txt"),
        ],
    )
    step = build_step(root)
    assert step.attachments == [
        Attachment(name="Screenshot 1", source="Screenshot 1", type=None),
        Attachment(name="log.txt", source="log.txt", type=None),
    ]


def test_timing_uses_started_and_ended():
    step = build_step(
        activity("a", started_time=T0, ended_time=T0 + timedelta(seconds=2))
    )
    assert step.start == T0_MS
    assert step.stop == T0_MS + 2000


def test_timing_without_end_uses_start():
    step = build_step(activity("a", started_time=T0))
    assert step.start == T0_MS
    assert step.stop == T0_MS


def test_timing_without_times_is_zero():
    step = build_step(activity("a"))
    assert step.start == 0
    assert step.stop == 0


def test_build_steps_skips_annotations_and_keeps_order():
    steps = build_steps(
        [activity("one"), activity("allure.id:7"), activity("two")]
    )
    assert [s.name for s in steps] == ["one", "two"]


def test_deep_tree_does_not_hit_recursion_limit():
    node = failure("bottom")
    for level in range(3000):
        node = activity(f"level {level}", node)
    step = build_step(node)

    depth = 0
    current = step
    while current.steps:
        current = current.steps[0]
        depth += 1
    assert depth == 3000
    assert step.status == Status.FAILED
    assert step.status_details.message == "bottom"
