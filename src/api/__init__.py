"""Front-end boundary: response envelopes and error-to-status mapping."""

from .responses import ApiResponse, PagePayload, status_for

__all__ = ["ApiResponse", "PagePayload", "status_for"]
