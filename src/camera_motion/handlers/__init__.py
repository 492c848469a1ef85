from __future__ import annotations

from typing import Dict

from .common import Handler, StepContext, StepResult
from .reposition import handle_focus_on, handle_move_to, handle_static
from .rotate import handle_orbit, handle_pan, handle_rotate, handle_tilt
from .translate import handle_dolly, handle_pedestal, handle_truck, handle_zoom

HANDLERS: Dict[str, Handler] = {
    "static": handle_static,
    "zoom": handle_zoom,
    "orbit": handle_orbit,
    "pan": handle_pan,
    "tilt": handle_tilt,
    "dolly": handle_dolly,
    "truck": handle_truck,
    "pedestal": handle_pedestal,
    "move_to": handle_move_to,
    "focus_on": handle_focus_on,
    "rotate": handle_rotate,
}

__all__ = ["HANDLERS", "Handler", "StepContext", "StepResult"]
