"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from mpesa_budgeter.utils.clock import SystemClock


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> SystemClock:
    """Provide the wall-clock used as 'now' by analytics and the parser"""
    return SystemClock()
