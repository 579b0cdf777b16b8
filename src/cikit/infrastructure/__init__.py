"""Infrastructure layer: external tools, files, HTTP and the workspace.

Everything that spawns a process or touches the network lives here.
Services reach it through :class:`~cikit.infrastructure.workspace.Workspace`.
"""

from cikit.infrastructure.process import CommandError, CommandRunner
from cikit.infrastructure.workspace import Workspace

__all__ = ["CommandError", "CommandRunner", "Workspace"]
