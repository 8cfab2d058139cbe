from typing import Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from errors import ValidationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsSchema(BaseModel):
    default_profile: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e
