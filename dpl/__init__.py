"""DPL: a small dynamically-typed scripting language with a tree-walking interpreter."""

from dpl.lang.error import DPLError
from dpl.lang.session import RunResult, Session, run

__all__ = ["DPLError", "RunResult", "Session", "run"]
