from pmtracker.infrastructure.config.settings import TrackerSettings, load_settings

__all__ = ["TrackerSettings", "load_settings"]
