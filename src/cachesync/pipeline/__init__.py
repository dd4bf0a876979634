"""Run orchestration."""

from .push import PushResult, push_cache

__all__ = ["PushResult", "push_cache"]
