from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout
from PySide6.QtCore import Qt

from vitalsim.monitors.display import TileReading
from .styles import COLORS, FONTS, get_tinted_frame_style


class VitalTile(QFrame):
    """
    Large numeric tile for one vital sign.
    The value is green when normal and red when abnormal.
    """
    def __init__(self, label, unit="", initial_value="--"):
        super().__init__()
        self.label_text = label
        self.current_color = None

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(12, 8, 12, 10)
        self.layout.setSpacing(6)

        self.lbl_title = QLabel(label)
        self.lbl_title.setStyleSheet(
            f"color: {COLORS['text']}; font-size: {FONTS['size_title']}; font-weight: 600;"
        )
        self.layout.addWidget(self.lbl_title, alignment=Qt.AlignLeft)

        row = QHBoxLayout()
        row.setSpacing(8)

        self.lbl_val = QLabel(initial_value)
        self.lbl_val.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        row.addWidget(self.lbl_val, stretch=1)

        # Units never truncate.
        self.lbl_unit = QLabel(unit)
        self.lbl_unit.setStyleSheet(f"color: {COLORS['text']}; font-size: {FONTS['size_normal']};")
        self.lbl_unit.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        row.addWidget(self.lbl_unit)
        self.layout.addLayout(row)

        self._apply_color(COLORS['text_dim'])

    def _apply_color(self, color):
        if color == self.current_color:
            return
        self.current_color = color
        self.setStyleSheet(get_tinted_frame_style(color, alpha=0.08, radius=10))
        self.lbl_val.setStyleSheet(
            f"color: {color}; font-size: {FONTS['size_numeric']}; font-weight: 700;"
        )

    def set_reading(self, reading: TileReading):
        self.lbl_val.setText(reading.text)
        self._apply_color(COLORS['normal'] if reading.is_normal else COLORS['abnormal'])
