"""Handlers for CircleCI API resources."""

from ccienv.handlers.base import BaseHandler
from ccienv.handlers.projects import ProjectHandler
from ccienv.handlers.variables import VariableHandler

__all__ = [
    "BaseHandler",
    "ProjectHandler",
    "VariableHandler",
]
