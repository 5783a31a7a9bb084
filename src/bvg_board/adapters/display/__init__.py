"""Display adapters (render sinks)."""

import logging

from bvg_board.adapters.config.app_config import AppConfig
from bvg_board.adapters.display.console_render_sink import ConsoleRenderSink
from bvg_board.adapters.display.matrix_render_sink import MatrixRenderSink, create_matrix_sink
from bvg_board.domain.ports.render_sink import RenderSink

logger = logging.getLogger(__name__)


def create_render_sink(config: AppConfig, force_console: bool = False) -> RenderSink:
    """Create the LED matrix sink, falling back to the console when no matrix is available."""
    if config.display_enabled and not force_console:
        try:
            return create_matrix_sink(
                config.display_width,
                config.display_height,
                config.display_hardware_mapping,
                config.display_brightness,
                config.display_font_path,
            )
        except ImportError:
            logger.warning("rgbmatrix library not available, falling back to console output")
        except Exception as e:
            logger.warning(f"Failed to initialize display ({e}), falling back to console output")
    return ConsoleRenderSink(max_width=config.console_max_width)


__all__ = ["ConsoleRenderSink", "MatrixRenderSink", "create_render_sink"]
