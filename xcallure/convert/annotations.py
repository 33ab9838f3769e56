"""
Allure annotations embedded in activity titles.

Test code marks report metadata by opening an activity whose title carries
a well-known prefix, e.g. `allure.label.owner: bob` or the older
`allure_link_issue_bug_https://tracker/1`. Those activities are metadata,
not steps: the step builder drops them and this module folds them into
labels, links, name, description and test case id.
"""

import logging
import re
from collections.abc import Callable, Iterable, Iterator

from pydantic import BaseModel, Field

from xcallure.allure.models import Label, Link
from xcallure.xcresult.models import TestActivity, TestCase

logger = logging.getLogger(__name__)

ID_PREFIX = "allure.id:"
NAME_PREFIX = "allure.name:"
DESCRIPTION_PREFIX = "allure.description:"
LABEL_PREFIX = "allure.label."
LINK_PREFIX = "allure.link."
LEGACY_LABEL_PREFIX = "allure_label_"
LEGACY_LINK_PREFIX = "allure_link_"

ANNOTATION_PREFIXES = (
    ID_PREFIX,
    NAME_PREFIX,
    DESCRIPTION_PREFIX,
    LABEL_PREFIX,
    LINK_PREFIX,
    LEGACY_LABEL_PREFIX,
    LEGACY_LINK_PREFIX,
)

AS_ID_LABEL = "AS_ID"

_LINK_PATTERN = re.compile(r"^(.+?)(?:\[(.+?)\])?:(.+)$")


class TestCaseIdAnnotation(BaseModel):
    value: str


class NameAnnotation(BaseModel):
    value: str


class DescriptionAnnotation(BaseModel):
    value: str


class LabelAnnotation(BaseModel):
    key: str
    value: str


class LinkAnnotation(BaseModel):
    name: str
    type: str
    url: str


Annotation = (
    TestCaseIdAnnotation
    | NameAnnotation
    | DescriptionAnnotation
    | LabelAnnotation
    | LinkAnnotation
)


def is_annotation(activity: TestActivity) -> bool:
    return activity.title.startswith(ANNOTATION_PREFIXES)


def _split_segments(text: str, max_splits: int) -> list[str]:
    """
    Split on "_" at most `max_splits` times, skipping empty segments.

    Leading underscores are skipped and whatever follows the last split is
    kept whole:
    "owner__bob" -> ["owner", "_bob"], "_owner_bob" -> ["owner", "bob"].
    """

    parts: list[str] = []
    start = 0
    index = 0
    while index < len(text) and len(parts) < max_splits:
        if text[index] == "_":
            if index > start:
                parts.append(text[start:index])
            start = index + 1
        index += 1
    if start < len(text):
        parts.append(text[start:])
    return parts


def parse_test_case_id(title: str) -> TestCaseIdAnnotation | None:
    if not title.startswith(ID_PREFIX):
        return None
    return TestCaseIdAnnotation(value=title[len(ID_PREFIX):])


def parse_name(title: str) -> NameAnnotation | None:
    if not title.startswith(NAME_PREFIX):
        return None
    return NameAnnotation(value=title[len(NAME_PREFIX):])


def parse_description(title: str) -> DescriptionAnnotation | None:
    if not title.startswith(DESCRIPTION_PREFIX):
        return None
    return DescriptionAnnotation(value=title[len(DESCRIPTION_PREFIX):])


def parse_label(title: str) -> LabelAnnotation | None:
    """allure.label.<key>:<value>"""
    if not title.startswith(LABEL_PREFIX):
        return None
    content = title[len(LABEL_PREFIX):]
    key, colon, value = content.partition(":")
    if not colon:
        return None
    # Spaces and tabs only; line breaks stay part of the value.
    return LabelAnnotation(key=key, value=value.strip(" \t"))


def parse_legacy_label(title: str) -> LabelAnnotation | None:
    """allure_label_<key>_<value>"""
    if not title.startswith(LEGACY_LABEL_PREFIX):
        return None
    parts = _split_segments(title[len(LEGACY_LABEL_PREFIX):], max_splits=1)
    if len(parts) != 2:
        return None
    return LabelAnnotation(key=parts[0], value=parts[1])


def parse_link(title: str) -> LinkAnnotation | None:
    """allure.link.<name>[<type>]:<url>, the [<type>] part is optional."""
    if not title.startswith(LINK_PREFIX):
        return None
    match = _LINK_PATTERN.match(title[len(LINK_PREFIX):])
    if match is None:
        return None
    name, link_type, url = match.groups()
    return LinkAnnotation(name=name, type=link_type or "", url=url.strip(" \t"))


def parse_legacy_link(title: str) -> LinkAnnotation | None:
    """allure_link_<name>_<type>_<url>"""
    if not title.startswith(LEGACY_LINK_PREFIX):
        return None
    parts = _split_segments(title[len(LEGACY_LINK_PREFIX):], max_splits=2)
    if len(parts) != 3:
        return None
    name, link_type, url = parts
    return LinkAnnotation(name=name, type=link_type, url=url)


# Tried in order; the first parser that returns a value decides the activity.
ANNOTATION_PARSERS: tuple[Callable[[str], Annotation | None], ...] = (
    parse_test_case_id,
    parse_name,
    parse_description,
    parse_label,
    parse_legacy_label,
    parse_link,
    parse_legacy_link,
)


def parse_annotation(title: str) -> Annotation | None:
    for parser in ANNOTATION_PARSERS:
        annotation = parser(title)
        if annotation is not None:
            return annotation
    return None


class AnnotationResult(BaseModel):
    labels: list[Label]
    links: list[Link]
    name: str | None = None
    description: str | None = None
    test_case_id: str | None = None


class AnnotationState(BaseModel):
    """Accumulator for one test case; build it, apply annotations, finish it."""

    labels: dict[str, list[str]] = Field(default_factory=dict)
    links: list[Link] = Field(default_factory=list)
    test_name: str | None = None
    test_description: str | None = None
    test_case_id: str | None = None

    def apply(self, annotation: Annotation) -> None:
        if isinstance(annotation, TestCaseIdAnnotation):
            self.test_case_id = annotation.value
            self.labels[AS_ID_LABEL] = [annotation.value]
        elif isinstance(annotation, NameAnnotation):
            self.test_name = annotation.value
        elif isinstance(annotation, DescriptionAnnotation):
            self.test_description = annotation.value
        elif isinstance(annotation, LabelAnnotation):
            self.labels.setdefault(annotation.key, []).append(annotation.value)
        elif isinstance(annotation, LinkAnnotation):
            self.links.append(
                Link(name=annotation.name, type=annotation.type, url=annotation.url)
            )

    def finish(self) -> AnnotationResult:
        labels = [
            Label(name=key, value=value)
            for key, values in self.labels.items()
            for value in values
        ]
        return AnnotationResult(
            labels=labels,
            links=list(self.links),
            name=self.test_name,
            description=self.test_description,
            test_case_id=self.test_case_id,
        )


def iter_activities(activities: Iterable[TestActivity]) -> Iterator[TestActivity]:
    """Depth-first pre-order walk without recursion."""
    stack = list(reversed(list(activities)))
    while stack:
        activity = stack.pop()
        yield activity
        stack.extend(reversed(activity.subactivities))


def default_labels(test_case: TestCase) -> dict[str, list[str]]:
    summary = test_case.summary
    destination = test_case.destination
    labels: dict[str, list[str]] = {}

    if summary.path:
        labels["parentSuite"] = [summary.path[0]]

    suite = next((part for part in summary.identifier.split("/") if part), None)
    if suite is not None:
        labels["suite"] = [suite]

    labels["host"] = [
        f"{destination.name} ({destination.identifier}) on {destination.machine_identifier}"
    ]
    return labels


def extract_annotations(test_case: TestCase) -> AnnotationResult:
    state = AnnotationState(labels=default_labels(test_case))

    for activity in iter_activities(test_case.activities):
        annotation = parse_annotation(activity.title)
        if annotation is not None:
            state.apply(annotation)
        elif is_annotation(activity):
            logger.debug("Dropping malformed annotation %r", activity.title)

    return state.finish()
