"""Play loop and session journal."""

from . import log
from .loop import ABORTED, GameSession, SessionSummary

__all__ = ["ABORTED", "GameSession", "SessionSummary", "log"]
