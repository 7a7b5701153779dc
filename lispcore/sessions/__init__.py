from lispcore.sessions.manager import SessionManager
from lispcore.sessions.reaper import IdleReaper

__all__ = ["SessionManager", "IdleReaper"]
