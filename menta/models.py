"""Shared pydantic models: the contract between providers, the pipeline and main.py."""

from pydantic import BaseModel, ConfigDict, Field


class Comment(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str  # author login, e.g. "alice" or "github-actions[bot]"
    body: str


class IssueSnapshot(BaseModel):
    """Title, body and comments of one issue, as fetched."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    body: str = ""
    comments: list[Comment] = []  # fetch order


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str  # relative to the walked root, "/" separated
    contents: str


class CommandEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_prompt: str
    description: str = ""


class InvocationParams(BaseModel):
    """Everything one run needs from the command line."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    issue: int = Field(gt=0)
    command: str = Field(min_length=1)
    github_token: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
