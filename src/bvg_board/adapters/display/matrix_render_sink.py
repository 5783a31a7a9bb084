"""RGB LED matrix render sink (Raspberry Pi, hzeller rpi-rgb-led-matrix bindings)."""

import logging
from typing import Any

from bvg_board.adapters.display.text_layout import departure_rows
from bvg_board.domain.models.departure import Departure
from bvg_board.domain.ports.render_sink import RenderSink

logger = logging.getLogger(__name__)

# BVG yellow/amber on black
TEXT_COLOR = (255, 200, 0)

LINE_HEIGHT = 9
START_Y = 5
START_X = 2
MAX_CHARS_PER_ROW = 16


class MatrixRenderSink(RenderSink):
    """Draws one departure over three rows of the LED matrix."""

    def __init__(self, matrix: Any, graphics: Any, font: Any) -> None:
        """Initialize with an RGBMatrix, the rgbmatrix.graphics module and a loaded font."""
        self._matrix = matrix
        self._graphics = graphics
        self._font = font
        self._color = graphics.Color(*TEXT_COLOR)
        self._canvas = matrix.CreateFrameCanvas()

    def render(self, departure: Departure) -> None:
        """Draw the departure on the offscreen canvas and swap it in."""
        try:
            canvas = self._canvas
            canvas.Clear()
            rows = departure_rows(
                departure.line, departure.destination, departure.minutes_until, MAX_CHARS_PER_ROW
            )
            for i, row in enumerate(rows):
                self._graphics.DrawText(
                    canvas, self._font, START_X, START_Y + i * LINE_HEIGHT, self._color, row
                )
            self._canvas = self._matrix.SwapOnVSync(canvas)
        except Exception as e:
            logger.error(f"Failed to render departure on matrix: {e}", exc_info=True)

    def close(self) -> None:
        """Blank the matrix."""
        try:
            self._matrix.Clear()
        except Exception as e:
            logger.warning(f"Failed to clear matrix: {e}")


def create_matrix_sink(
    width: int, height: int, hardware_mapping: str, brightness: int, font_path: str
) -> MatrixRenderSink:
    """Open the LED matrix.

    Raises:
        ImportError: If the rgbmatrix bindings are not installed.
        Exception: If the font cannot be loaded or the matrix cannot be opened.
    """
    from rgbmatrix import RGBMatrix, RGBMatrixOptions, graphics  # type: ignore[import-not-found]

    options = RGBMatrixOptions()
    options.cols = width
    options.rows = height
    options.hardware_mapping = hardware_mapping
    options.brightness = brightness

    font = graphics.Font()
    font.LoadFont(font_path)

    matrix = RGBMatrix(options=options)
    logger.info(f"Display initialized: {width}x{height} ({hardware_mapping})")
    return MatrixRenderSink(matrix, graphics, font)
