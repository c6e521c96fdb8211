from cmdflow.builders.base import CommandBuilder
from cmdflow.builders.fzf import FzfBuilder, fzf
from cmdflow.builders.ghq import GhqBuilder, ghq
from cmdflow.builders.run import RunBuilder, command

__all__ = [
    "CommandBuilder",
    "FzfBuilder",
    "GhqBuilder",
    "RunBuilder",
    "command",
    "fzf",
    "ghq",
]
