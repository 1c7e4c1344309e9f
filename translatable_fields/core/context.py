from __future__ import annotations

from typing import Optional

from translatable_fields.core.model import RenderContext


INDEX_CONTROLLER = "Laravel\\Nova\\Http\\Controllers\\ResourceIndexController"


def context_from_controller(
    controller: Optional[str],
    *,
    index_controller: str = INDEX_CONTROLLER,
    default: RenderContext = "detail",
) -> RenderContext:
    """Map a routed controller action (``Class@method``) to a render context.

    Only the resource index listing counts as ``index``; no route at all
    (console, queued jobs) is treated as a non-index render.
    """
    if not controller:
        return default
    current = controller.split("@", 1)[0]
    return "index" if current == index_controller else default
