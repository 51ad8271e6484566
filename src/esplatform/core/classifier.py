"""Index Error Classifier — Turns a failed index request into level/reason/type.

Elasticsearch error bodies wrap the original failure in successive
``caused_by`` layers (the ingest pipeline wraps the attachment processor,
which wraps the Tika parser, ...).  The outermost reason is of little use to
an operator, so the cause is resolved in this order:

  1. ``error.caused_by.caused_by``
  2. ``error.caused_by``
  3. ``error`` itself

If the resolved cause carries no ``reason``, the first entry of
``error.root_cause`` is used instead, and failing that the raw message.

Causes whose type is listed in ``BENIGN_ERROR_TYPES`` are expected conditions
of the source file and are classified as notices; everything else is an error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from esplatform.models.classification import ClassificationLevel, ClassificationResult
from esplatform.platform.base.exceptions import UnparsableStructureError

logger = logging.getLogger(__name__)

BENIGN_ERROR_TYPES = frozenset(
    {
        "encrypted_document_exception",
        "invalid_password_exception",
    }
)

UNKNOWN_ERROR = "unknown error"


def failure_message(failure: BaseException | str) -> str:
    """Serialized message of a failure.

    The ``elasticsearch`` client keeps the decoded response of a failed request
    in ``ApiError.body``; it is serialized back to JSON so that the payload, not
    the exception's summary string, gets classified.
    """
    if isinstance(failure, str):
        return failure
    body = getattr(failure, "body", None)
    if isinstance(body, Mapping):
        try:
            return json.dumps(body)
        except (TypeError, ValueError, RecursionError):
            pass
    return str(failure)


def _get(path: str, data: Any) -> Any:
    """Walk a dotted ``path`` through nested mappings; ``None`` when absent."""
    for key in path.split("."):
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def _get_mapping(path: str, data: Any) -> Mapping[str, Any]:
    value = _get(path, data)
    return value if isinstance(value, Mapping) else {}


def _get_str(key: str, data: Any) -> str:
    value = _get(key, data)
    return value if isinstance(value, str) else ""


class IndexErrorClassifier:
    """Classifies index failures as errors or notices.

    Classification never raises: a payload it cannot make sense of yields an
    ``error`` carrying the raw message (or ``'unknown error'``).
    """

    @staticmethod
    def classify(failure: BaseException | str) -> ClassificationResult:
        """Classify a failed index attempt.

        Args:
            failure: The exception raised by the attempt, or its message.

        Returns:
            The level, reason and (when known) engine error type.
        """
        message = failure_message(failure)

        try:
            payload = json.loads(message)
        except (ValueError, TypeError, RecursionError):
            payload = None

        if not isinstance(payload, (Mapping, list)):
            return ClassificationResult(level=ClassificationLevel.ERROR, reason=UNKNOWN_ERROR)

        error = _get_mapping("error", payload)
        if not error:
            return ClassificationResult(level=ClassificationLevel.ERROR, reason=message)

        try:
            return IndexErrorClassifier._parse_caused_by(error)
        except UnparsableStructureError:
            logger.debug("No reason in caused_by chain, falling back to root_cause")

        root_cause = error.get("root_cause")
        if isinstance(root_cause, list) and root_cause:
            first = root_cause[0]
            reason = _get_str("reason", first)
            if reason:
                return ClassificationResult(
                    level=ClassificationLevel.ERROR,
                    reason=reason,
                    type=_get_str("type", first) or None,
                )

        return ClassificationResult(level=ClassificationLevel.ERROR, reason=message)

    @staticmethod
    def _parse_caused_by(error: Mapping[str, Any]) -> ClassificationResult:
        """Resolve the innermost cause of ``error`` and classify it.

        Raises:
            UnparsableStructureError: If the resolved cause has no reason.
        """
        cause = _get_mapping("caused_by.caused_by", error)
        if not cause:
            cause = _get_mapping("caused_by", error)
        if not cause:
            cause = error

        reason = _get_str("reason", cause)
        if not reason:
            raise UnparsableStructureError("Unable to parse given response structure")

        error_type = _get_str("type", cause) or None
        level = ClassificationLevel.NOTICE if error_type in BENIGN_ERROR_TYPES else ClassificationLevel.ERROR
        return ClassificationResult(level=level, reason=reason, type=error_type)
