"""Console display adapters."""

from presence_history.adapters.console.text_renderer import TextRenderer

__all__ = ["TextRenderer"]
