"""Async Python client for the HR System API."""
