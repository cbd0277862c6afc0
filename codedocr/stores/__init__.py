"""Persistence helpers for the declaration model."""

from .model_store import ModelStore, ModelStoreError

__all__ = ["ModelStore", "ModelStoreError"]
