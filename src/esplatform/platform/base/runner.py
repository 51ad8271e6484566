"""Runner interface — Callbacks the platform uses to report to the orchestrator.

The orchestrator (the "runner") drives the batch loop and owns the UI.  A
platform holds an optional reference to it: when none is attached every
notification is dropped and the platform keeps working, silently.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

from esplatform.models.index import ErrorSeverity, Index

logger = logging.getLogger(__name__)


class ResultType(str, Enum):
    """Outcome kind of a reported index result."""

    SUCCESS = "success"
    WARNING = "warning"
    FAIL = "fail"


class Runner(ABC):
    """Progress and outcome sink implemented by the orchestrator."""

    @abstractmethod
    def update_action(self, action: str, force: bool = False) -> None:
        """Report the action currently being performed.

        Args:
            action: Action name (e.g. ``'indexDocumentWithoutContent'``).
            force: Display the action even if the UI throttles updates.
        """

    @abstractmethod
    def new_index_error(self, index: Index, message: str, exception: str, severity: ErrorSeverity) -> None:
        """Report an error recorded against an index."""

    @abstractmethod
    def new_index_result(self, index: Index, message: str, status: str, result_type: ResultType) -> None:
        """Report the outcome of an operation on an index."""


class RunnerNotifier:
    """Forwards notifications to an optional ``Runner``."""

    def __init__(self, runner: Runner | None = None) -> None:
        self.runner = runner

    def update_action(self, action: str, force: bool = False) -> None:
        if self.runner is None:
            return
        self.runner.update_action(action, force)

    def new_index_error(self, index: Index, message: str, exception: str, severity: ErrorSeverity) -> None:
        if self.runner is None:
            return
        self.runner.new_index_error(index, message, exception, severity)

    def new_index_result(self, index: Index, message: str, status: str, result_type: ResultType) -> None:
        if self.runner is None:
            logger.debug("%s: %s (%s)", index.es_id, status, result_type.value)
            return
        self.runner.new_index_result(index, message, status, result_type)
