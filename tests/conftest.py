"""Shared test fixtures."""

import pytest

from menta.models import CommandEntry, Comment, FileEntry, IssueSnapshot
from menta.settings import AiConfig, MentaConfig


@pytest.fixture
def config() -> MentaConfig:
    return MentaConfig(
        ai=AiConfig(
            model="gpt-4o-mini",
            commands={
                "describe": CommandEntry(system_prompt="Describe:", description="Describe the issue."),
                "suggest": CommandEntry(system_prompt="Suggest:"),
            },
        )
    )


@pytest.fixture
def snapshot() -> IssueSnapshot:
    return IssueSnapshot(
        title="Bug",
        body="crashes",
        comments=[
            Comment(login="alice", body="confirmed"),
            Comment(login="github-actions[bot]", body="auto-note"),
        ],
    )


@pytest.fixture
def files() -> list[FileEntry]:
    return [FileEntry(path="a.go", contents="package a")]
