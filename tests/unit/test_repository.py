import sys
import threading
import time
import unittest
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from watchface_core.config import MINUTE_HAND_LENGTH_MAX, StyleConfig
from watchface_core.repository import WatchFaceRepository, build_watch_face_data
from watchface_renderer import AnalogWatchRenderer, PillowCanvas, RenderBounds, RenderParameters, RenderState
from watchface_renderer.themes import COMPLICATION_BLUE, COMPLICATION_WHITE, get_color_style


class CountingComplication:
    def __init__(self) -> None:
        self.enabled = True
        self.theme_ids = []

    def apply_theme(self, theme) -> None:
        self.theme_ids.append(theme.id)

    def render(self, canvas, time, render_parameters) -> None:
        pass


class RepositoryTests(unittest.TestCase):
    def test_subscribe_delivers_current_value(self):
        repo = WatchFaceRepository()
        seen = []
        repo.subscribe(seen.append)
        self.assertEqual(seen, [None])

        data = repo.update_user_style(color_style="blue")
        self.assertEqual(seen, [None, data])
        self.assertEqual(data.active_color_style.id, "blue")

        late = []
        repo.subscribe(late.append)
        self.assertEqual(late, [data])

    def test_subscription_close_stops_delivery(self):
        repo = WatchFaceRepository()
        seen = []
        with repo.subscribe(seen.append) as subscription:
            self.assertEqual(repo.subscriber_count, 1)
        self.assertTrue(subscription.closed)
        self.assertEqual(repo.subscriber_count, 0)
        subscription.close()
        repo.update_user_style(draw_hour_pips=False)
        self.assertEqual(seen, [None])

    def test_minute_length_is_clamped(self):
        repo = WatchFaceRepository()
        data = repo.update_user_style(minute_hand_length_fraction=2.0)
        self.assertEqual(data.minute_hand.length_fraction, MINUTE_HAND_LENGTH_MAX)

    def test_updates_keep_previous_settings(self):
        repo = WatchFaceRepository()
        repo.load(StyleConfig(color_style="green", draw_hour_pips=False, minute_hand_length_fraction=0.3))
        data = repo.update_user_style(minute_hand_length_fraction=0.25)
        self.assertEqual(data.active_color_style.id, "green")
        self.assertFalse(data.watch_face.draw_hour_pips)
        self.assertAlmostEqual(data.minute_hand.length_fraction, 0.25)

    def test_snapshots_are_replaced_not_mutated(self):
        repo = WatchFaceRepository()
        first = repo.update_user_style(minute_hand_length_fraction=0.3)
        second = repo.update_user_style(minute_hand_length_fraction=0.35)
        self.assertIsNot(first, second)
        self.assertAlmostEqual(first.minute_hand.length_fraction, 0.3)

    def test_build_from_style(self):
        data = build_watch_face_data(StyleConfig(color_style="red", draw_hour_pips=True, minute_hand_length_fraction=0.2))
        self.assertEqual(data.active_color_style.id, "red")
        self.assertEqual(data.ambient_color_style.id, "ambient")
        self.assertTrue(data.watch_face.draw_hour_pips)


class RepositoryRendererTests(unittest.TestCase):
    def test_renderer_reacts_to_user_style(self):
        repo = WatchFaceRepository()
        complication = CountingComplication()
        renderer = AnalogWatchRenderer(repo, complications={100: complication})
        canvas = PillowCanvas(200, 200)
        bounds = RenderBounds.of_size(200, 200)
        now = datetime(2024, 5, 17, 10, 10, 30)

        renderer.render(canvas, bounds, now, RenderParameters())
        self.assertEqual(renderer.geometry_recomputations, 0)

        repo.update_user_style(color_style="white")
        renderer.render(canvas, bounds, now, RenderParameters())
        self.assertEqual(renderer.geometry_recomputations, 1)

        repo.update_user_style(draw_hour_pips=False)
        renderer.render(canvas, bounds, now, RenderParameters())
        self.assertEqual(renderer.geometry_recomputations, 1)

        repo.update_user_style(minute_hand_length_fraction=0.2)
        repo.update_user_style(color_style="blue")
        renderer.render(canvas, bounds, now, RenderParameters())
        self.assertEqual(renderer.geometry_recomputations, 2)
        self.assertEqual(complication.theme_ids, [COMPLICATION_WHITE, COMPLICATION_BLUE])

        renderer.close()
        self.assertEqual(repo.subscriber_count, 0)


class RecordingCanvas(PillowCanvas):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self.path_colors = []
        self.path_heights = []
        self.circle_colors = []

    def draw_path(self, path, paint):
        self.path_colors.append(paint.color)
        _, top, _, bottom = path.bounds()
        self.path_heights.append(bottom - top)

    def draw_circle(self, cx, cy, radius, paint):
        self.circle_colors.append(paint.color)


class RepositoryThreadingTests(unittest.TestCase):
    def test_close_during_delivery_does_not_block(self):
        repo = WatchFaceRepository()
        entered = threading.Event()

        def slow_subscriber(data):
            if data is not None and data.active_color_style.id == "red":
                entered.set()
                time.sleep(0.3)

        repo.subscribe(slow_subscriber)
        renderer = AnalogWatchRenderer(repo)

        updater = threading.Thread(target=repo.update_user_style, kwargs={"color_style": "red"}, daemon=True)
        updater.start()
        self.assertTrue(entered.wait(2))
        closer = threading.Thread(target=renderer.close, daemon=True)
        closer.start()

        updater.join(3)
        closer.join(3)
        self.assertFalse(updater.is_alive())
        self.assertFalse(closer.is_alive())
        self.assertEqual(renderer.state, RenderState.DISPOSED)
        # The in-flight snapshot reached the renderer after close and was dropped.
        self.assertIsNone(renderer.watch_face_data)
        self.assertEqual(repo.subscriber_count, 1)

    def test_each_frame_uses_one_snapshot(self):
        repo = WatchFaceRepository()
        repo.update_user_style(color_style="red", minute_hand_length_fraction=0.2)
        renderer = AnalogWatchRenderer(repo)
        bounds = RenderBounds.of_size(200, 200)
        now = datetime(2024, 5, 17, 10, 10, 30)
        styles = {
            "red": (get_color_style("red"), 0.2),
            "blue": (get_color_style("blue"), 0.4),
        }
        done = threading.Event()
        frames = []

        def flip():
            for i in range(200):
                name = "blue" if i % 2 == 0 else "red"
                repo.update_user_style(color_style=name, minute_hand_length_fraction=styles[name][1])
            done.set()

        def draw():
            while not done.is_set() or len(frames) < 50:
                canvas = RecordingCanvas(200, 200)
                renderer.render(canvas, bounds, now, RenderParameters())
                frames.append(canvas)

        updater = threading.Thread(target=flip, daemon=True)
        drawer = threading.Thread(target=draw, daemon=True)
        drawer.start()
        updater.start()
        updater.join(10)
        drawer.join(10)
        self.assertFalse(updater.is_alive())
        self.assertFalse(drawer.is_alive())

        for canvas in frames:
            matches = [entry for entry in styles.values() if entry[0].primary_color == canvas.path_colors[0]]
            self.assertEqual(len(matches), 1)
            style, length = matches[0]
            self.assertEqual(canvas.path_colors, [style.primary_color, style.primary_color, style.secondary_color])
            self.assertAlmostEqual(canvas.path_heights[1], length * bounds.width)
            self.assertEqual(set(canvas.circle_colors), {style.outer_element_color})

        renderer.close()


if __name__ == "__main__":
    unittest.main()
