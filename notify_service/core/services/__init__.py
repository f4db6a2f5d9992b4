"""Shared service layer primitives."""

from notify_service.core.services.base import BaseService

__all__ = ["BaseService"]
