"""
Pydantic models for llmsindex configuration.

Defines all configuration schemas using Pydantic v2 for validation,
defaults, and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ProjectConfig(BaseModel):
    """Fixed text used in the headers of both generated documents."""

    name: str = "VinMemory"
    tagline: str = (
        "A public, AI-friendly reference library for curated prompts, guides, and cheatsheets."
    )
    summary: str = (
        "Designed to work with [GitMCP](https://gitmcp.io) so AI tools can connect directly."
    )

    model_config = {"extra": "forbid"}


class IndexConfig(BaseModel):
    """What the walker includes and skips, and which sections the short index curates.

    Immutable: the same value is handed to every generator function for a run.
    """

    include_extensions: frozenset[str] = Field(
        default=frozenset({".md"}),
        description="File extensions listed in the full index (lowercase, leading dot)",
    )
    skip_dirs: frozenset[str] = Field(
        default=frozenset({".git", "node_modules", ".github"}),
        description="Directory names never entered, matched by exact name at any depth",
    )
    top_sections: tuple[str, ...] = Field(
        default=("prompts", "guides", "cheatsheets"),
        description="Top-level sections probed for README.md, in display order",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("include_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            normalized = set()
            for ext in value:
                ext = str(ext).strip().lower()
                if ext and not ext.startswith("."):
                    ext = f".{ext}"
                normalized.add(ext)
            return frozenset(normalized)
        return value


class GitMCPConfig(BaseModel):
    """Endpoint embedded in the connection section of both documents."""

    base_url: str = "https://gitmcp.io"
    repository: str | None = Field(
        default=None,
        description="owner/name identifier; usually filled from GITHUB_REPOSITORY",
    )
    fallback_repository: str = "vdeaugustine/VinMemory"

    model_config = {"extra": "forbid"}

    @property
    def endpoint_url(self) -> str:
        """Base URL templated with the repository (or the fallback identifier)."""
        slug = self.repository or self.fallback_repository
        return f"{self.base_url.rstrip('/')}/{slug}"


class OutputConfig(BaseModel):
    """Names of the generated files, relative to the scan root."""

    short_file: str = "llms.txt"
    full_file: str = "llms-full.txt"

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "warn", "error"] = "warn"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Complete application configuration.

    This is the root of the configuration tree. It combines all sections
    and is the entry point for validation.
    """

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    gitmcp: GitMCPConfig = Field(default_factory=GitMCPConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
