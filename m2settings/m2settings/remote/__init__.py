from .client import Connector, Session
from .nexus import NexusSession, UserToken, connect

__all__ = ["Connector", "NexusSession", "Session", "UserToken", "connect"]
