import sys
import time
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import QApplication, QFrame, QHBoxLayout, QMainWindow, QVBoxLayout, QWidget
from PySide6.QtCore import QTimer

from vitalsim.core.engine import VitalsEngine
from vitalsim.core.enums import TrackedMetric
from vitalsim.core.state import EngineConfig, Snapshot
from vitalsim.monitors.display import tile_readings
from .styles import COLORS, get_bar_style, get_base_widget_style
from .tiles import VitalTile


class DashboardWidget(QWidget):
    """
    Chart row (SpO2 histogram, heart rate, MAP) above the four vital tiles.

    Pure consumer: it renders whatever snapshot it is handed and never
    touches engine state.
    """
    def __init__(self, config: Optional[EngineConfig] = None):
        super().__init__()
        self.config = config or EngineConfig()
        self.capacity = self.config.history_capacity
        self.setStyleSheet(get_base_widget_style())

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(16, 8, 16, 8)
        self.layout.setSpacing(0)

        self.setup_ui()

    def setup_ui(self):
        # --- Top Row: Charts ---
        chart_bar = QFrame()
        chart_bar.setStyleSheet(get_bar_style())
        chart_layout = QHBoxLayout(chart_bar)
        chart_layout.setContentsMargins(14, 14, 14, 14)
        chart_layout.setSpacing(14)

        self.spo2_plot = self.create_plot(COLORS['spo2'], "SpO₂ (%)")
        self.spo2_bars = pg.BarGraphItem(
            x=np.arange(self.capacity, dtype=float), height=np.zeros(self.capacity),
            width=0.8, brush=COLORS['spo2'],
        )
        self.spo2_plot.addItem(self.spo2_bars)

        self.hr_plot = self.create_plot(COLORS['hr'], "Heart Rate (BPM)")
        self.hr_curve = self.hr_plot.plot(pen=pg.mkPen(color=COLORS['hr'], width=2.0))

        self.map_plot = self.create_plot(COLORS['map'], "Mean Arterial Pressure (mmHg)")
        self.map_curve = self.map_plot.plot(pen=pg.mkPen(color=COLORS['map'], width=2.0))

        for plot in (self.spo2_plot, self.hr_plot, self.map_plot):
            chart_layout.addWidget(plot)
        self.layout.addWidget(chart_bar)

        self.layout.addStretch()

        # --- Bottom Row: Live Metrics ---
        tile_bar = QFrame()
        tile_bar.setStyleSheet(get_bar_style())
        tile_layout = QHBoxLayout(tile_bar)
        tile_layout.setContentsMargins(8, 8, 8, 8)
        tile_layout.setSpacing(12)

        self.tiles = {
            "spo2": VitalTile("SpO₂", "%"),
            "heart_rate": VitalTile("Heart Rate", "BPM"),
            "blood_pressure": VitalTile("Blood Pressure", "mmHg", "--/--"),
            "temperature": VitalTile("Temperature", "°F"),
        }
        for tile in self.tiles.values():
            tile_layout.addWidget(tile)
        self.layout.addWidget(tile_bar)

    def create_plot(self, color, title):
        plot = pg.PlotWidget()
        plot.setBackground(COLORS['background_alt'])
        plot.setMouseEnabled(x=False, y=False)
        plot.hideAxis('bottom')
        plot.hideAxis('left')
        plot.setXRange(-0.5, self.capacity - 0.5, padding=0)
        plot.setMinimumHeight(90)
        plot.setAntialiasing(True)

        plot.setTitle(title, color=color, size="11pt")
        return plot

    def update_snapshot(self, snapshot: Snapshot):
        """Render one published snapshot."""
        spo2 = snapshot.values(TrackedMetric.SPO2)
        self.spo2_bars.setOpts(x=np.arange(spo2.size, dtype=float), height=spo2)

        hr = snapshot.values(TrackedMetric.HEART_RATE)
        self.hr_curve.setData(np.arange(hr.size, dtype=float), hr)

        mean_pressure = snapshot.values(TrackedMetric.MEAN_ARTERIAL_PRESSURE)
        self.map_curve.setData(np.arange(mean_pressure.size, dtype=float), mean_pressure)

        for reading in tile_readings(snapshot, self.config.ranges):
            self.tiles[reading.key].set_reading(reading)


class DashboardWindow(QMainWindow):
    """Main window: owns the engine and drives it from a Qt timer."""
    def __init__(self, config: Optional[EngineConfig] = None, engine: Optional[VitalsEngine] = None):
        super().__init__()
        self.setWindowTitle("VitalSim - Vitals Dashboard")
        self.resize(1400, 600)
        self.setStyleSheet(get_base_widget_style())

        self.engine = engine or VitalsEngine(config)
        self.dashboard = DashboardWidget(self.engine.config)
        self.setCentralWidget(self.dashboard)
        self.engine.subscribe(self.dashboard.update_snapshot)

        # Game Loop
        self.timer = QTimer()
        self.timer.setInterval(50)  # 20 FPS clock feed
        self.timer.timeout.connect(self.game_loop)
        self.last_real_time = 0.0

    def start(self):
        self.engine.start()
        self.last_real_time = time.monotonic()
        self.timer.start()

    def game_loop(self):
        now = time.monotonic()
        dt = now - self.last_real_time
        self.last_real_time = now
        self.engine.advance(dt)

    def closeEvent(self, event):
        self.timer.stop()
        self.engine.stop()
        super().closeEvent(event)


def main(config: Optional[EngineConfig] = None):
    app = QApplication.instance()
    if not app:
        app = QApplication(sys.argv)

    window = DashboardWindow(config)
    window.show()
    window.start()
    sys.exit(app.exec())
