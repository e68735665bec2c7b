"""Run project lifecycle commands from anywhere inside a source tree."""

from .dispatcher import ActionDispatcher
from .models import ActionKind, Invocation, Project

__all__ = ["ActionDispatcher", "ActionKind", "Invocation", "Project"]
