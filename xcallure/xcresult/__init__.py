from xcallure.xcresult.models import (
    ActivityType,
    Destination,
    LazyAttachment,
    TestActivity,
    TestAttachment,
    TestCase,
    TestRun,
    TestStatus,
    TestSummary,
)

__all__ = [
    "ActivityType",
    "Destination",
    "LazyAttachment",
    "TestActivity",
    "TestAttachment",
    "TestCase",
    "TestRun",
    "TestStatus",
    "TestSummary",
]
