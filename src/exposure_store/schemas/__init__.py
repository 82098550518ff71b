# src/exposure_store/schemas/__init__.py
"""Pydantic value objects exchanged with the exposure store."""

from .diagnosis_key import TemporaryExposureKey

__all__ = ["TemporaryExposureKey"]
