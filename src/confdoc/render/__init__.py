from .options import (
    OptionsRenderer,
    RenderResult,
    render_table_html,
)

__all__ = [
    "OptionsRenderer",
    "RenderResult",
    "render_table_html",
]
