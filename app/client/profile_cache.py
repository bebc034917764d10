from pathlib import Path
from typing import Optional, Union
import logging

from pydantic import ValidationError

from app.config.settings import settings
from app.modules.profiles.schemas import Profile

logger = logging.getLogger(__name__)


class ProfileCache:
    """Last fetched profile on local disk, read at start-up for instant paint."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.profile_cache_path)

    def load(self) -> Optional[Profile]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read cached profile {self.path}: {e}")
            return None
        try:
            return Profile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cached profile: {e}")
            return None

    def save(self, profile: Profile) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(profile.model_dump_json(by_alias=True), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write cached profile {self.path}: {e}")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove cached profile {self.path}: {e}")
