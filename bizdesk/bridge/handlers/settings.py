"""
Settings operations.
"""

from .base import HandlerGroup, operation


class SettingsHandler(HandlerGroup):
    @operation("get-settings", "settings-data")
    def get_settings(self, payload):
        return self.repository.settings.get_all()

    @operation("save-settings", "settings-saved")
    def save_settings(self, payload):
        return self.repository.settings.save(payload)
