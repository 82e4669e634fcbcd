"""A small client for the ReportPortal launch API."""

__all__ = ["client", "launch"]