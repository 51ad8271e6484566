"""Base platform interface — Abstract classes for search platforms and runners."""

from esplatform.platform.base.platform import SearchPlatform
from esplatform.platform.base.runner import ResultType, Runner, RunnerNotifier

__all__ = ["ResultType", "Runner", "RunnerNotifier", "SearchPlatform"]
