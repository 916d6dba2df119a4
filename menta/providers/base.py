"""Abstract base classes for the issue tracker and the completion service."""

from abc import ABC, abstractmethod

from menta.models import IssueSnapshot


class IssueSource(ABC):
    @abstractmethod
    def get_snapshot(self) -> IssueSnapshot: ...

    @abstractmethod
    def post_comment(self, body: str) -> str: ...


class CompletionService(ABC):
    @abstractmethod
    def complete(self, prompt: str) -> str: ...
