from xcallure.allure.models import (
    Attachment,
    Label,
    Link,
    Parameter,
    Status,
    StatusDetails,
    StepResult,
    TestResult,
)

__all__ = [
    "Attachment",
    "Label",
    "Link",
    "Parameter",
    "Status",
    "StatusDetails",
    "StepResult",
    "TestResult",
]
