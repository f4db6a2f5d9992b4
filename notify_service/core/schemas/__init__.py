"""Shared API schemas."""

from notify_service.core.schemas.problem_details import ProblemDetails

__all__ = ["ProblemDetails"]
