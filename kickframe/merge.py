"""Deep merge for JSON-like configuration trees.

- Mappings merge key by key, recursively.
- Lists are replaced wholesale by the overlay.
- Any other non-null overlay value replaces the base value.
- A ``None`` overlay never overrides; the base value is kept.
"""

from __future__ import annotations

from typing import Any


def deep_merge(base: Any, overlay: Any) -> Any:
    """Merge ``overlay`` into ``base`` and return the result.

    When both are dicts, ``base`` is updated in place and returned;
    otherwise the winning value is returned.
    """
    if isinstance(base, dict) and isinstance(overlay, dict):
        for key, value in overlay.items():
            if key in base:
                base[key] = deep_merge(base[key], value)
            else:
                base[key] = value
        return base
    if overlay is None:
        return base
    return overlay