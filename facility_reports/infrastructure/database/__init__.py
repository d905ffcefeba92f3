from .connection import get_engine, get_session, init_db

__all__ = ["get_engine", "get_session", "init_db"]
