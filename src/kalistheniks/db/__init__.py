"""Database module for Kalistheniks."""

from .schema import SCHEMA

__all__ = ["SCHEMA"]
