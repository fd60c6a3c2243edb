"""Interactive project picker: key decoding, terminal control, and rendering."""

from .loop import run_picker, run_picker_on
from .view import PickerState, handle_picker_key, render_picker

__all__ = [
    "PickerState",
    "handle_picker_key",
    "render_picker",
    "run_picker",
    "run_picker_on",
]
