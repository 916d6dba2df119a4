"""One triage run: fetch the issue, build the prompt, ask the model, post the answer."""

import logging
from collections.abc import Callable
from typing import NamedTuple

from rich.markup import escape

from menta.commands import resolve_command
from menta.log import LOGGER_NAME
from menta.models import FileEntry
from menta.prompt import assemble_prompt, filter_comments
from menta.providers.base import CompletionService, IssueSource
from menta.settings import MentaConfig

FileSource = Callable[[], list[FileEntry]]


class RunResult(NamedTuple):
    completion: str
    comment_url: str


class Pipeline:
    """Sequences the collaborators for a single issue.

    Every collaborator is called at most once. Errors are not caught here:
    FetchError, CompletionError and PostError all abort the run, and an
    unknown command raises ConfigurationError before any network call.
    """

    def __init__(
        self,
        config: MentaConfig,
        issues: IssueSource,
        completion: CompletionService,
        files: FileSource,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.issues = issues
        self.completion = completion
        self.files = files
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def build_prompt(self, command: str) -> tuple[str, str]:
        """Return (model, prompt) for command against the current issue."""
        resolved = resolve_command(command, self.config)

        snapshot = self.issues.get_snapshot()
        self.logger.debug("Title: %s", snapshot.title)
        self.logger.debug("Body: %s", snapshot.body)
        for comment in filter_comments(snapshot.comments):
            self.logger.debug("%s: %s", comment.login, comment.body)

        files = self.files()
        self.logger.info("Read %d file(s) from the repository", len(files))

        prompt = assemble_prompt(snapshot, files, resolved.system_prompt)
        return resolved.model, prompt

    def run(self, command: str) -> RunResult:
        model, prompt = self.build_prompt(command)
        self.logger.debug("[blue]Prompt: |\n%s[/blue]", escape(prompt), extra={"markup": True})

        self.logger.info("Requesting '%s' completion from %s", command, model)
        completion = self.completion.complete(prompt)
        self.logger.debug("[green]Response: |\n%s[/green]", escape(completion), extra={"markup": True})

        # An empty completion is still posted.
        comment_url = self.issues.post_comment(completion)
        self.logger.info("Posted comment %s", comment_url)
        return RunResult(completion=completion, comment_url=comment_url)
