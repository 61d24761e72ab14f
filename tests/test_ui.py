import os
import sys
import time
import unittest

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest.importorskip("PySide6")
pytest.importorskip("pyqtgraph")

from PySide6.QtWidgets import QApplication

from vitalsim.core.engine import VitalsEngine
from vitalsim.core.state import EngineConfig
from vitalsim.monitors.display import tile_readings
from vitalsim.ui.dashboard import DashboardWidget, DashboardWindow
from vitalsim.ui.styles import COLORS


# Helper to get QApp
def get_qapp():
    app = QApplication.instance()
    if not app:
        app = QApplication(sys.argv)
    return app


class TestDashboardWidget(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = get_qapp()

    def setUp(self):
        self.engine = VitalsEngine(EngineConfig(rng_seed=11))
        self.widget = DashboardWidget(self.engine.config)
        self.engine.subscribe(self.widget.update_snapshot)

    def test_tiles_show_latest_snapshot(self):
        snapshot = self.engine.start()
        for reading in tile_readings(snapshot):
            tile = self.widget.tiles[reading.key]
            self.assertEqual(tile.lbl_val.text(), reading.text)
            expected = COLORS['normal'] if reading.is_normal else COLORS['abnormal']
            self.assertEqual(tile.current_color, expected)

    def test_charts_follow_history(self):
        self.engine.start()
        snapshot = self.engine.tick()
        x, y = self.widget.hr_curve.getData()
        self.assertEqual(len(y), 20)
        self.assertAlmostEqual(y[-1], snapshot.heart_rate)
        _, map_y = self.widget.map_curve.getData()
        self.assertAlmostEqual(map_y[-1], snapshot.map_history[-1].value)
        self.assertEqual(len(self.widget.spo2_bars.opts['height']), 20)
        self.assertAlmostEqual(self.widget.spo2_bars.opts['height'][-1], snapshot.spo2)


class TestDashboardWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = get_qapp()

    def test_game_loop_feeds_engine(self):
        window = DashboardWindow(EngineConfig(rng_seed=2))
        window.show()
        window.start()
        self.assertEqual(window.engine.tick_count, 20)

        # Pretend 2.1s of wall time elapsed since the last frame.
        window.last_real_time = time.monotonic() - 2.1
        window.game_loop()
        self.assertEqual(window.engine.tick_count, 21)

        window.close()
        self.assertFalse(window.engine.running)
        self.assertFalse(window.timer.isActive())
