import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set

logger = logging.getLogger(__name__)

ENGINES = ("strex", "re", "regex")


@dataclass
class RegexProfile:
    name: str
    description: str
    enabled_features: Set[str]
    engine: str
    id: str
    max_steps: Optional[int] = None

    @property
    def is_builtin(self) -> bool:
        """True when the profile runs the strex teaching engine."""
        return self.engine == "strex"


class ProfileManager:
    def __init__(self, config_path: Optional[Path] = None):
        self.profiles: Dict[str, RegexProfile] = {}
        self.config_path = config_path or self.default_config_path()
        self.load_profiles(self.config_path)

    @staticmethod
    def default_config_path() -> Path:
        return Path(__file__).parent.parent / "default_configs" / "profiles.json"

    def load_profiles(self, config_path: Path) -> None:
        """Load profiles from a JSON configuration file."""
        if not config_path.exists():
            logger.warning("Profile configuration %s not found, no profiles loaded", config_path)
            return

        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        for profile_id, profile_data in data.items():
            engine = profile_data.get("engine", "strex")
            if engine not in ENGINES:
                raise ValueError(f"Profile '{profile_id}' uses unknown engine '{engine}'")
            self.profiles[profile_id] = RegexProfile(
                name=profile_data["name"],
                description=profile_data["description"],
                enabled_features=set(profile_data["enabled_features"]),
                engine=engine,
                id=profile_id,
                max_steps=profile_data.get("max_steps"),
            )
        logger.debug("Loaded %d profiles from %s", len(self.profiles), config_path)

    def get_profile(self, profile_id: str) -> Optional[RegexProfile]:
        return self.profiles.get(profile_id)

    def list_profiles(self) -> List[RegexProfile]:
        return list(self.profiles.values())

    def get_default_profile_id(self) -> str:
        return "strex_full"
