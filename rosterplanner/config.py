"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.assembler import DayScheduleAssembler
from .domain.models import Role
from .domain.roster_resolver import DEFAULT_MAIN_ROSTER_SIZE, RosterResolver


class SchedulingConfig(BaseModel):
    """Settings that steer the day resolution."""
    main_roster_size: int = DEFAULT_MAIN_ROSTER_SIZE
    off_day_keywords: List[str] = Field(default_factory=lambda: ["off"])
    locale: str = "en"

    @field_validator("main_roster_size")
    @classmethod
    def validate_roster_size(cls, value: int) -> int:
        """Ensure at least one main player is expected."""
        if value < 1:
            raise ValueError("main_roster_size must be at least 1")
        return value

    @field_validator("off_day_keywords")
    @classmethod
    def validate_keywords(cls, value: List[str]) -> List[str]:
        """Lower-case keywords and drop blanks."""
        keywords = [keyword.strip().lower() for keyword in value if keyword.strip()]
        if not keywords:
            raise ValueError("off_day_keywords must contain at least one keyword")
        return keywords


class RosterMember(BaseModel):
    """A player or coach as named in the availability sheet."""
    name: str
    aliases: List[str] = Field(default_factory=list)

    def matches(self, identifier: str) -> bool:
        """Case-insensitive match on the name or any alias."""
        key = identifier.strip().lower()
        return key == self.name.lower() or key in (alias.lower() for alias in self.aliases)


class RosterConfig(BaseModel):
    """Roster composition: which names are mains, subs and coach."""
    mains: List[RosterMember]
    subs: List[RosterMember] = Field(default_factory=list)
    coach: RosterMember

    @model_validator(mode="after")
    def validate_unique_names(self) -> "RosterConfig":
        """Ensure no name or alias is used twice across the roster."""
        seen: set[str] = set()
        for member in self.members():
            for key in (member.name, *member.aliases):
                key = key.lower()
                if key in seen:
                    raise ValueError(f"Duplicate roster name detected: {key}")
                seen.add(key)
        return self

    def members(self) -> List[RosterMember]:
        """All members in sheet order: mains, subs, coach."""
        return [*self.mains, *self.subs, self.coach]


class AppConfig(BaseModel):
    """Application configuration."""
    roster: RosterConfig
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    timezone: str = "Europe/Berlin"
    days_file: Optional[Path] = None

    @model_validator(mode="after")
    def validate_roster_size(self) -> "AppConfig":
        """Ensure the configured mains match the expected roster size."""
        expected = self.scheduling.main_roster_size
        if len(self.roster.mains) != expected:
            raise ValueError(
                f"Roster must list exactly {expected} main players, got {len(self.roster.mains)}"
            )
        return self

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative day files are resolved against the config file location
        if config.days_file is not None and not config.days_file.is_absolute():
            config.days_file = config_path.parent / config.days_file

        return config

    def find_member(self, identifier: str) -> RosterMember | None:
        """Find a roster member by name or alias."""
        for member in self.roster.members():
            if member.matches(identifier):
                return member
        return None

    def role_of(self, identifier: str) -> Role | None:
        """Return the role of a roster member, or None if unknown."""
        for role, members in (
            (Role.MAIN, self.roster.mains),
            (Role.SUB, self.roster.subs),
            (Role.COACH, [self.roster.coach]),
        ):
            if any(member.matches(identifier) for member in members):
                return role
        return None

    def build_resolver(self) -> RosterResolver:
        return RosterResolver(
            main_roster_size=self.scheduling.main_roster_size,
            off_day_keywords=self.scheduling.off_day_keywords,
        )

    def build_assembler(self) -> DayScheduleAssembler:
        return DayScheduleAssembler(locale=self.scheduling.locale)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
