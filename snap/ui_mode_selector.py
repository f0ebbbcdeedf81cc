from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QButtonGroup, QCheckBox, QHBoxLayout, QWidget

from snap.jobs import ProcessingMode


class ModeSelector(QWidget):
    """Two checkboxes acting as a radio group; exactly one mode is selected."""

    mode_changed = Signal(object)  # ProcessingMode

    def __init__(self, parent: QWidget | None = None, initial: ProcessingMode = ProcessingMode.RESIZE_APP_STORE):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(24)

        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        self._boxes: dict[ProcessingMode, QCheckBox] = {}
        for mode in ProcessingMode:
            box = QCheckBox(mode.label, self)
            self._group.addButton(box)
            self._boxes[mode] = box
            layout.addWidget(box)

        self._boxes[initial].setChecked(True)
        self._mode = initial
        self._group.buttonToggled.connect(self._on_toggled)

    @property
    def mode(self) -> ProcessingMode:
        return self._mode

    def set_mode(self, mode: ProcessingMode) -> None:
        self._boxes[mode].setChecked(True)

    def box(self, mode: ProcessingMode) -> QCheckBox:
        return self._boxes[mode]

    def _on_toggled(self, button, checked: bool) -> None:
        if not checked:
            return
        for mode, box in self._boxes.items():
            if box is button and mode is not self._mode:
                self._mode = mode
                self.mode_changed.emit(mode)
                return
