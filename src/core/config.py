"""Configuration from environment variables (.env)."""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    project_root: Path
    config_dir: Path
    data_dir: Path
    logs_dir: Path
    engines_file: Path
    icons_dir: Path
    legacy_fallback_default: bool  # fallback flag for records written before the flag existed
    log_level: str

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        config_dir = Path(os.getenv("WEBSEARCH_CONFIG_DIR", project_root / "config"))
        data_dir = Path(os.getenv("WEBSEARCH_DATA_DIR", project_root / "data"))
        return cls(
            project_root=project_root,
            config_dir=config_dir,
            data_dir=data_dir,
            logs_dir=Path(os.getenv("WEBSEARCH_LOGS_DIR", project_root / "logs")),
            engines_file=config_dir / "engines.json",
            icons_dir=data_dir / "icons",
            legacy_fallback_default=_env_bool("WEBSEARCH_LEGACY_FALLBACK", True),
            log_level=os.getenv("WEBSEARCH_LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list[str]:
        errors = []
        if self.config_dir.exists() and not self.config_dir.is_dir():
            errors.append(f"Config path is not a directory: {self.config_dir}")
        if self.data_dir.exists() and not self.data_dir.is_dir():
            errors.append(f"Data path is not a directory: {self.data_dir}")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")
        return errors


config = Config.load()
