import logging
import os
import re
import shutil
from typing import List, Optional

from config import base_dir as default_base_dir
from errors import (
    AlreadyExistsError,
    AmbiguousProfileError,
    LastProfileError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
PROFILE_NAME = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
LEGACY_FILES = ("config.json", "templates.json", "current.json")
LEGACY_WORKOUTS = "workouts"


class ProfileManager:
    """Create, list and resolve the profile directories under a base dir."""

    def __init__(self, base_dir: Optional[str] = None) -> None:
        self.base_dir = base_dir or default_base_dir()
        self.profiles_dir = os.path.join(self.base_dir, "profiles")

    def profile_dir(self, name: str) -> str:
        return os.path.join(self.profiles_dir, name)

    def list_profiles(self) -> List[str]:
        if not os.path.isdir(self.profiles_dir):
            return []
        return sorted(
            name
            for name in os.listdir(self.profiles_dir)
            if os.path.isdir(self.profile_dir(name))
        )

    def profile_exists(self, name: str) -> bool:
        return os.path.isdir(self.profile_dir(name))

    def create_profile(self, name: str) -> None:
        if not PROFILE_NAME.match(name):
            raise ValidationError(
                "Profile name must be lowercase alphanumeric with optional "
                "hyphens (not at start/end)"
            )
        if self.profile_exists(name):
            raise AlreadyExistsError(f'Profile "{name}" already exists')
        os.makedirs(os.path.join(self.profile_dir(name), "workouts"))
        logger.info("Created profile %s", name)

    def delete_profile(self, name: str) -> None:
        if not self.profile_exists(name):
            raise NotFoundError(f'Profile "{name}" does not exist')
        if len(self.list_profiles()) == 1:
            raise LastProfileError("Cannot delete the only profile")
        shutil.rmtree(self.profile_dir(name))
        logger.info("Deleted profile %s", name)

    def has_legacy_data(self) -> bool:
        for filename in LEGACY_FILES:
            if os.path.exists(os.path.join(self.base_dir, filename)):
                return True
        return os.path.isdir(os.path.join(self.base_dir, LEGACY_WORKOUTS))

    def migrate_legacy_data(self) -> None:
        """Move a pre-profile flat layout into the ``default`` profile."""
        if not self.has_legacy_data():
            return
        target = self.profile_dir(DEFAULT_PROFILE)
        os.makedirs(target, exist_ok=True)
        for filename in LEGACY_FILES:
            self._move_legacy(filename, target)
        self._move_legacy(LEGACY_WORKOUTS, target)
        os.makedirs(os.path.join(target, LEGACY_WORKOUTS), exist_ok=True)
        logger.info("Migrated legacy data into profile %s", DEFAULT_PROFILE)

    def _move_legacy(self, name: str, target: str) -> None:
        src = os.path.join(self.base_dir, name)
        if not os.path.exists(src):
            return
        dest = os.path.join(target, name)
        if os.path.exists(dest):
            logger.warning("Not migrating %s: %s already exists", src, dest)
            return
        os.rename(src, dest)
        logger.debug("Moved %s to %s", src, dest)

    def resolve_profile(self, explicit: Optional[str] = None) -> str:
        """Return the profile a command should operate on."""
        if explicit:
            if not self.profile_exists(explicit):
                raise NotFoundError(f'Profile "{explicit}" does not exist')
            return explicit

        profiles = self.list_profiles()
        if not profiles:
            if self.has_legacy_data():
                self.migrate_legacy_data()
            else:
                self.create_profile(DEFAULT_PROFILE)
            return DEFAULT_PROFILE
        if len(profiles) == 1:
            return profiles[0]
        raise AmbiguousProfileError(profiles)
