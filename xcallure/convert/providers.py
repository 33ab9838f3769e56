"""Collaborators consulted by the converter for test identity and parameters."""

import hashlib
from typing import Protocol

from xcallure.allure.models import Parameter
from xcallure.xcresult.models import TestCase


class HistoryIdProvider(Protocol):
    def make_history_id(self, test_case: TestCase) -> str:
        ...


class ParametersProvider(Protocol):
    def make_parameters(self, test_case: TestCase) -> list[Parameter]:
        ...


class IdentifierHistoryIdProvider:
    """Stable sha1 fingerprint of the test identifier."""

    def make_history_id(self, test_case: TestCase) -> str:
        return hashlib.sha1(test_case.summary.identifier.encode("utf-8")).hexdigest()


class NoParametersProvider:
    def make_parameters(self, test_case: TestCase) -> list[Parameter]:
        return []


class DestinationParametersProvider:
    """
    Tag each result with the device it ran on.

    Use it when one test plan targets several destinations, so results
    from different devices can be told apart in the report.
    """

    def __init__(self, parameter_name: str = "Device"):
        self.parameter_name = parameter_name

    def make_parameters(self, test_case: TestCase) -> list[Parameter]:
        return [Parameter(name=self.parameter_name, value=test_case.destination.name)]
