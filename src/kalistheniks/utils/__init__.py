"""Utility helpers."""

from .log_sanitizer import LogSanitizationFilter, configure_logging, install_log_sanitizer

__all__ = ["LogSanitizationFilter", "configure_logging", "install_log_sanitizer"]
