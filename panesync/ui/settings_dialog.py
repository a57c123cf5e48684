"""
Settings dialog for the PaneSync section of the ConfigManager.
"""
from PySide6.QtWidgets import (QCheckBox, QDialog, QHBoxLayout, QLabel, QPushButton,
                               QVBoxLayout)
from loguru import logger


class SyncSettingsDialog(QDialog):
    """
    Two toggles bound to ConfigManager:
    - sync.enabled: mirror navigation into linked panes
    - sync.show_indicators: badge linked tab headers
    """

    def __init__(self, config_manager, parent=None):
        super().__init__(parent)
        self.config = config_manager
        self.setWindowTitle("PaneSync Settings")
        self.resize(420, 180)
        self._init_ui()
        self.config.on_changed.connect(self._on_config_changed)
        logger.info("SyncSettingsDialog initialized")

    def _init_ui(self):
        layout = QVBoxLayout(self)

        self.enabled_check = QCheckBox("Sync files between linked panes")
        self.enabled_check.setChecked(self.config.get("sync", "enabled"))
        self.enabled_check.toggled.connect(
            lambda checked: self.config.update("sync", "enabled", checked))
        layout.addWidget(self.enabled_check)
        layout.addWidget(QLabel("Linking panes from the menu works even when sync is off."))

        self.indicators_check = QCheckBox("Show link badge on tab headers")
        self.indicators_check.setChecked(self.config.get("sync", "show_indicators"))
        self.indicators_check.toggled.connect(
            lambda checked: self.config.update("sync", "show_indicators", checked))
        layout.addWidget(self.indicators_check)

        layout.addStretch()

        button_layout = QHBoxLayout()
        button_layout.addStretch()
        self.reset_btn = QPushButton("Reset to Defaults")
        self.reset_btn.clicked.connect(self._on_reset)
        button_layout.addWidget(self.reset_btn)
        self.close_btn = QPushButton("Close")
        self.close_btn.clicked.connect(self.accept)
        button_layout.addWidget(self.close_btn)
        layout.addLayout(button_layout)

    def _on_reset(self):
        self.config.reset()
        logger.info("PaneSync settings reset to defaults")

    def _on_config_changed(self, section, key, value):
        # Reflect external changes without re-triggering update()
        for check, name in ((self.enabled_check, "enabled"),
                            (self.indicators_check, "show_indicators")):
            check.blockSignals(True)
            check.setChecked(self.config.get("sync", name))
            check.blockSignals(False)

    def done(self, result):
        self.config.on_changed.disconnect(self._on_config_changed)
        super().done(result)
