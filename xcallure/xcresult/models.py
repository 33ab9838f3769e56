"""
Read-only model of an Xcode test case as recorded in a result bundle.

Populating these models (xcresulttool output, plist decoding) is left to
the caller. Every model is frozen: the converter only ever reads them.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(StrEnum):
    INTERNAL = "internal"
    USER_CREATED = "userCreated"
    ATTACHMENT_CONTAINER = "attachmentContainer"
    FAILURE = "failure"
    DELETED_ATTACHMENT = "deletedAttachment"


class TestStatus(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"
    EXPECTED_FAILURE = "expectedFailure"


class TestAttachment(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    filename: str | None = None


class LazyAttachment:
    """
    Handle to attachment bytes that have not been read yet.

    The converter threads these through untouched; only the writer that
    eventually stores attachments calls `load()`.
    """

    __slots__ = ("name", "_loader")

    def __init__(self, name: str, loader: Callable[[], bytes] | None = None):
        self.name = name
        self._loader = loader

    def load(self) -> bytes:
        if self._loader is None:
            raise ValueError(f"Attachment {self.name!r} has no loader")
        return self._loader()

    def __repr__(self) -> str:
        return f"LazyAttachment(name={self.name!r})"


class TestActivity(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    activity_type: ActivityType = ActivityType.USER_CREATED
    started_time: datetime | None = None
    ended_time: datetime | None = None
    subactivities: list["TestActivity"] = Field(default_factory=list)
    attachments: list[TestAttachment] = Field(default_factory=list)

    @classmethod
    def from_tree(cls, data: "Mapping[str, Any] | TestActivity") -> "TestActivity":
        """
        Build an activity tree from nested mappings without recursion.

        `model_validate` trips pydantic's recursion guard a few hundred levels
        down; this validates one node at a time, children first, and hands
        the finished children to their parent as instances.
        """

        nodes: list[Mapping[str, Any] | TestActivity] = []
        children: list[list[int]] = []
        pending: list[tuple[Mapping[str, Any] | TestActivity, int]] = [(data, -1)]
        while pending:
            node, parent = pending.pop()
            index = len(nodes)
            nodes.append(node)
            children.append([])
            if parent >= 0:
                children[parent].append(index)
            if isinstance(node, TestActivity):
                continue
            for child in reversed(node.get("subactivities") or []):
                pending.append((child, index))

        built: list[TestActivity | None] = [None] * len(nodes)
        for index in range(len(nodes) - 1, -1, -1):
            node = nodes[index]
            if isinstance(node, TestActivity):
                built[index] = node
                continue
            fields = dict(node)
            fields["subactivities"] = [built[c] for c in children[index]]
            built[index] = cls.model_validate(fields)
        return built[0]


class TestSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    identifier: str
    path: list[str] = Field(default_factory=list)
    # Raw value from the bundle; unknown values are rejected at conversion time.
    status: str
    duration: float = 0.0


class Destination(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    identifier: str
    machine_identifier: str


class TestRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    started_time: datetime


class TestCase(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    summary: TestSummary
    destination: Destination
    test_run: TestRun
    activities: list[TestActivity] = Field(default_factory=list)
    attachments: list[LazyAttachment] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TestCase":
        """Like `model_validate`, but safe for arbitrarily deep activity trees."""
        fields = dict(data)
        fields["activities"] = [
            TestActivity.from_tree(activity) for activity in data.get("activities") or []
        ]
        return cls.model_validate(fields)
