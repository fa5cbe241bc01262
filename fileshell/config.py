"""Completion engine configuration stored as JSON."""

import json
import logging
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional, Dict, List, Any

from fileshell.paths import IS_WINDOWS, get_home_dir

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".fileshell"


@dataclass
class CompletionConfig:
    """Settings consulted while completing command lines."""
    home_dir: str = field(default_factory=get_home_dir)
    case_insensitive_paths: bool = IS_WINDOWS
    use_vim_help: bool = False
    help_tags_file: Optional[str] = None
    colors_dir: Optional[str] = None
    # glob pattern -> commands that open matching files
    filetypes: Dict[str, List[str]] = field(default_factory=dict)
    # MIME type -> commands that handle it
    mime_handlers: Dict[str, List[str]] = field(default_factory=dict)
    # option name -> "bool", "int", "string" or "set"
    options: Dict[str, str] = field(default_factory=dict)
    variables: List[str] = field(default_factory=list)
    functions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletionConfig":
        """Build config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigManager:
    """Loads and saves the completion config file."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to config file (default: ~/.fileshell/config.json)
        """
        if config_path is None:
            CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            config_path = CONFIG_DIR / "config.json"

        self.config_path = config_path
        self.config = CompletionConfig()
        self._load()

    def _load(self) -> None:
        """Load configuration from file."""
        if not self.config_path.exists():
            self.config = CompletionConfig()
            return

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level value must be an object")
            self.config = CompletionConfig.from_dict(data)
        except (json.JSONDecodeError, ValueError, TypeError, IOError) as e:
            logger.warning(f"Error loading config {self.config_path}: {e}")
            self.config = CompletionConfig()

    def save(self) -> None:
        """Save configuration to file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self.config.to_dict(), f, indent=2)
        except IOError as e:
            logger.error(f"Error saving config: {e}")
            raise

    def update(self, **changes: Any) -> CompletionConfig:
        """
        Change settings and persist them.

        Args:
            **changes: Field names and their new values

        Returns:
            Updated configuration
        """
        data = self.config.to_dict()
        data.update(changes)
        self.config = CompletionConfig.from_dict(data)
        self.save()
        logger.info(f"Config updated: {', '.join(sorted(changes))}")
        return self.config
