"""Deep merging of rendering contexts."""

from __future__ import annotations

from ..core.models import Context, ContextValue


def _copy_value(value: ContextValue) -> ContextValue:
    if isinstance(value, dict):
        return {k: _copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy_value(v) for v in value]
    return value


def merge(base: Context, local: Context) -> Context:
    """Deep merge a local context onto a base context.

    Neither input is modified and the result shares no containers with them.

    Merge rules:
        - Mappings present on both sides are merged recursively
        - Any other value from ``local`` replaces the base value, lists included
        - Keys present on one side only are kept

    Key order is base keys first, then keys only present in ``local``.

    Args:
        base: Base context (lower precedence)
        local: Local context (higher precedence)

    Returns:
        Merged context
    """
    result: Context = {}

    for key, base_value in base.items():
        if key not in local:
            result[key] = _copy_value(base_value)
            continue
        local_value = local[key]
        if isinstance(base_value, dict) and isinstance(local_value, dict):
            result[key] = merge(base_value, local_value)
        else:
            result[key] = _copy_value(local_value)

    for key, local_value in local.items():
        if key not in base:
            result[key] = _copy_value(local_value)

    return result
