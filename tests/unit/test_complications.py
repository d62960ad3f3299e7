import sys
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from watchface_renderer.canvas import PaintStyle, PillowCanvas
from watchface_renderer.complications import (
    LEFT_COMPLICATION_ID,
    RIGHT_COMPLICATION_ID,
    CanvasComplication,
    SlotBounds,
    day_of_month,
    default_complications,
)
from watchface_renderer.models import DrawMode, RenderParameters
from watchface_renderer.themes import COMPLICATION_RED, get_complication_theme

FRIDAY = datetime(2024, 5, 17, 9, 45, 0)


class ComplicationTests(unittest.TestCase):
    def test_default_slots(self):
        slots = default_complications()
        self.assertEqual(sorted(slots), [LEFT_COMPLICATION_ID, RIGHT_COMPLICATION_ID])
        self.assertTrue(all(slot.enabled for slot in slots.values()))
        self.assertEqual(slots[RIGHT_COMPLICATION_ID].text_provider(FRIDAY), "17")
        self.assertEqual(slots[LEFT_COMPLICATION_ID].text_provider(FRIDAY), "FRI")

    def test_render_uses_applied_theme(self):
        slot = CanvasComplication(7, SlotBounds(0.2, 0.4, 0.4, 0.6), text_provider=day_of_month)
        theme = get_complication_theme(COMPLICATION_RED)
        slot.apply_theme(theme)
        canvas = PillowCanvas(200, 200)

        with patch.object(canvas, "draw_circle", wraps=canvas.draw_circle) as circle, patch.object(
            canvas, "draw_text", wraps=canvas.draw_text
        ) as text:
            slot.render(canvas, FRIDAY, RenderParameters())

        self.assertEqual(circle.call_count, 2)
        cx, cy, radius, border = circle.call_args_list[1].args
        for actual, expected in zip((cx, cy, radius), (60.0, 100.0, 20.0)):
            self.assertAlmostEqual(actual, expected)
        self.assertEqual(border.color, theme.border_color)
        self.assertEqual(border.style, PaintStyle.STROKE)
        self.assertEqual(text.call_args.args[0], "17")
        self.assertEqual(text.call_args.args[3].color, theme.text_color)

    def test_ambient_render_outlines_only(self):
        slot = CanvasComplication(7, SlotBounds(0.6, 0.4, 0.8, 0.6))
        canvas = PillowCanvas(200, 200)
        with patch.object(canvas, "draw_circle", wraps=canvas.draw_circle) as circle:
            slot.render(canvas, FRIDAY, RenderParameters(draw_mode=DrawMode.AMBIENT))
        self.assertEqual(circle.call_count, 1)
        self.assertEqual(circle.call_args.args[3].style, PaintStyle.STROKE)


if __name__ == "__main__":
    unittest.main()
