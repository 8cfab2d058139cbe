import os
import yaml

from errors import ValidationError
from settings_schema import SettingsSchema, validate_settings

APP_VERSION = "0.1.0"


def base_dir() -> str:
    """Return the data root, honouring ``WORKOUT_HOME`` when set."""
    override = os.environ.get("WORKOUT_HOME")
    if override:
        return os.path.expanduser(override)
    return os.path.join(os.path.expanduser("~"), ".workout")


class YamlConfig:
    """Load and save command line defaults from a YAML file."""

    KNOWN_KEYS = {
        "default_profile",
        "log_level",
    }

    def __init__(self, path: str | None = None) -> None:
        self.path = path or os.path.join(base_dir(), "settings.yaml")

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValidationError(f"{self.path} is not valid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError(f"{self.path} must contain a mapping")
        known = {k: v for k, v in data.items() if k in self.KNOWN_KEYS}
        validate_settings(known)
        return known

    def settings(self) -> SettingsSchema:
        return validate_settings(self.load())

    def save(self, data: dict) -> None:
        out = {k: v for k, v in data.items() if k in self.KNOWN_KEYS}
        validate_settings(out)
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)
