"""
Allure result model produced by the converter.

Attributes are snake_case; `model_dump(by_alias=True)` yields the camelCase
keys Allure expects (historyId, statusDetails, ...).
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Status(StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class AllureModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class StatusDetails(AllureModel):
    known: bool = False
    muted: bool = False
    flaky: bool = False
    message: str | None = None
    trace: str | None = None


class Attachment(AllureModel):
    name: str
    source: str
    # Left unset by the converter; readers infer it from the source extension.
    type: str | None = None


class Label(AllureModel):
    name: str
    value: str


class Link(AllureModel):
    name: str
    type: str
    url: str


class Parameter(AllureModel):
    name: str
    value: str


class StepResult(AllureModel):
    name: str
    status: Status
    status_details: StatusDetails | None = None
    stage: str | None = None
    description: str | None = None
    description_html: str | None = None
    steps: list["StepResult"] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    start: int = 0
    stop: int = 0


class TestResult(AllureModel):
    uuid: str
    history_id: str
    test_case_id: str | None = None
    test_case_name: str | None = None
    full_name: str
    labels: list[Label] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    name: str
    status: Status
    status_details: StatusDetails | None = None
    stage: str | None = None
    description: str | None = None
    description_html: str | None = None
    steps: list[StepResult] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    start: int
    stop: int
