"""
Lifecycle — the order state machine over store + cache.

    from orderly.lifecycle import OrderLifecycle, order_cache, order_key
"""

from __future__ import annotations

from orderly.lifecycle._manager import OrderLifecycle, order_cache, order_key

__all__ = ("OrderLifecycle", "order_key", "order_cache")
