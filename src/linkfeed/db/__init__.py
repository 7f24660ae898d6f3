"""Persistence plumbing: engine, sessions and clock."""

from .session import Base, SessionLocal, build_engine, get_db

__all__ = ["Base", "SessionLocal", "build_engine", "get_db"]
