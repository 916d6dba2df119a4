"""Resolve a command name against the configured command map."""

from typing import NamedTuple

from menta.errors import ConfigurationError
from menta.settings import MentaConfig


class ResolvedCommand(NamedTuple):
    name: str
    system_prompt: str
    model: str


def available_commands(config: MentaConfig) -> list[str]:
    return sorted(config.ai.commands)


def resolve_command(name: str, config: MentaConfig) -> ResolvedCommand:
    """Return the system prompt and model for command name.

    Unknown names raise ConfigurationError rather than falling back to an
    empty system prompt.
    """
    entry = config.ai.commands.get(name)
    if entry is None:
        known = ", ".join(available_commands(config)) or "(none)"
        raise ConfigurationError(f"Unknown command '{name}'. Available: {known}")
    return ResolvedCommand(name=name, system_prompt=entry.system_prompt, model=config.ai.model)
