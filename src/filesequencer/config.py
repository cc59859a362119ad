"""
Consolidated configuration system for filesequencer.

This module provides the Pydantic-based configuration for the renamer: the
extension allow-lists, traversal settings, and the per-run options built from
the command line. Application-wide settings can be overridden through
environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# FILE EXTENSIONS
# =============================================================================

DEFAULT_STATIC_EXTS = {".bmp", ".jpg", ".jpeg", ".tif", ".tiff", ".png", ".gif"}
DEFAULT_ANIMATED_EXTS = {".webm", ".avi", ".mpg", ".flv"}


class FileExtensions(BaseModel):
    """Recognized file extensions, split into static and animated sets."""

    static_exts: Annotated[set[str], Field(
        default=DEFAULT_STATIC_EXTS,
        description="Still image extensions renamed in place"
    )] = DEFAULT_STATIC_EXTS

    animated_exts: Annotated[set[str], Field(
        default=DEFAULT_ANIMATED_EXTS,
        description="Video/animation extensions, optionally moved to a subdirectory"
    )] = DEFAULT_ANIMATED_EXTS

    @field_validator('static_exts', 'animated_exts')
    @classmethod
    def normalize_exts(cls, v):
        """Lower-case every extension and enforce the leading dot."""
        normalized = set()
        for ext in v:
            ext = ext.strip().lower()
            if not ext or ext == ".":
                raise ValueError("Extensions must not be empty")
            normalized.add(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ValueError("At least one extension is required")
        return normalized

    @model_validator(mode='after')
    def check_disjoint(self):
        """An extension cannot be both static and animated."""
        overlap = self.static_exts & self.animated_exts
        if overlap:
            raise ValueError(f"Extensions listed as both static and animated: {sorted(overlap)}")
        return self


# =============================================================================
# TRAVERSAL SETTINGS
# =============================================================================

class TraversalSettings(BaseModel):
    """Directory traversal and safety settings."""

    animated_dir_name: Annotated[str, Field(
        default="Animated",
        min_length=1,
        description="Child directory that receives animated files; never traversed"
    )] = "Animated"

    min_path_depth: Annotated[int, Field(
        default=2,
        ge=0,
        description="Minimum number of path separators in the starting path"
    )] = 2

    @field_validator('animated_dir_name')
    @classmethod
    def validate_dir_name(cls, v):
        """Ensure the reserved directory is a plain name, not a path."""
        if "/" in v or "\\" in v or v in {".", ".."}:
            raise ValueError(f"animated_dir_name must be a plain directory name, got: {v!r}")
        return v


# =============================================================================
# RUN CONFIGURATION
# =============================================================================

class RunConfig(BaseModel):
    """Options for a single run, built once from the command line."""

    model_config = ConfigDict(frozen=True)

    start_path: Path
    recursive: bool = False
    move_animated: bool = False
    show_help: bool = False

    @field_validator('start_path')
    @classmethod
    def validate_path(cls, v):
        """Convert relative paths to absolute."""
        if not v.is_absolute():
            v = v.resolve()
        return v


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseSettings):
    """
    Main application configuration with environment variable support.

    All settings can be overridden via environment variables with FILESEQUENCER_ prefix.
    Example: FILESEQUENCER_TRAVERSAL__ANIMATED_DIR_NAME=Videos
    """

    model_config = SettingsConfigDict(
        env_prefix="FILESEQUENCER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    file_extensions: FileExtensions = FileExtensions()
    traversal: TraversalSettings = TraversalSettings()
    log_file: Path | None = None


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_config_from_env() -> AppConfig:
    """Create a new configuration instance from environment variables."""
    return AppConfig()
