"""Prompt assembly: issue text, human comments, then the repository dump."""

from collections.abc import Iterable

from menta.models import Comment, FileEntry, IssueSnapshot

# Comments posted by the workflow itself are never fed back into the prompt.
BOT_LOGIN = "github-actions[bot]"

SOURCE_DIVIDER = (
    "----------\n"
    "Below is the source code for the repository.  "
    "Please use the code below to help you answer the issue, including how to respond to the issue.\n"
)


def filter_comments(comments: Iterable[Comment]) -> list[Comment]:
    return [c for c in comments if c.login != BOT_LOGIN]


def build_user_prompt(snapshot: IssueSnapshot, files: Iterable[FileEntry]) -> str:
    """Render everything after the system prompt.

    Layout:
        Title:<title>
        Body:<body>
        <login>:<comment>      (one line per non-bot comment, fetch order)
        <divider>
        <path>:<contents>      (one per file, in the order given)
    """
    parts = [f"Title:{snapshot.title}\n", f"Body:{snapshot.body}\n"]
    parts += [f"{c.login}:{c.body}\n" for c in filter_comments(snapshot.comments)]
    parts.append(SOURCE_DIVIDER)
    parts += [f"{f.path}:{f.contents}\n" for f in files]
    return "".join(parts)


def assemble_prompt(snapshot: IssueSnapshot, files: Iterable[FileEntry], system_prompt: str) -> str:
    return system_prompt + build_user_prompt(snapshot, files)
