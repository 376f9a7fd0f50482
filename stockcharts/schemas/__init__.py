"""Pydantic schemas for API request/response validation.

This module exports the base schemas shared by every request/response model.
"""

from stockcharts.schemas.base import CamelCaseModel, StrictBaseModel

__all__ = [
    "CamelCaseModel",
    "StrictBaseModel",
]
