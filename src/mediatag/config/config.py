"""Configuration management for mediatag."""

from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from mediatag.config.paths import default_config_path
from mediatag.platform.logging import logger

DEFAULT_METADATA_ORDER: Final[tuple[str, ...]] = ("tags", "filename")
DEFAULT_METADATA_ORDER_VIDEO: Final[tuple[str, ...]] = ("filename", "tags")
DEFAULT_TAG_ORDER: Final[tuple[str, ...]] = (
    "id3v2",
    "id3v1",
    "vorbiscomment",
    "quicktime",
    "matroska",
    "ape",
    "asf",
    "avi",
    "mpeg",
    "riff",
)
DEFAULT_ADDITIONAL_DELIMITERS: Final[str] = r"[/]{2}|[/\\|,;]"
DEFAULT_COMMON_ABBR: Final[tuple[str, ...]] = (
    "divx", "xvid", "dvdrip", "hdtv", "lol", "axxo", "repack", "xor", "pdtv",
    "real", "vtv", "caph", "2hd", "proper", "fqm", "uncut", "topaz", "tvt",
    "notv", "fpn", "fov", "orenji", "0tv", "omicron", "dsr", "ws", "sys",
    "crimson", "wat", "hiqt", "internal", "brrip", "boheme", "vost", "vostfr",
    "fastsub", "addiction", "x264", "720p", "1080p", "yify", "evolve",
    "fihtv", "first", "bokutox", "bluray", "tvboom", "info",
)
DEFAULT_DETECT_ORDER: Final[tuple[str, ...]] = ("ascii", "utf-8")


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion."""
    return field(default=default, metadata={"path": True})


def _list_field(default: tuple[str, ...]) -> Any:
    return field(default_factory=lambda: list(default))


@dataclass
class Config:
    """Application configuration."""

    # Source priority for music and for video (movie/tvshow/clip) files
    metadata_order: list[str] = _list_field(DEFAULT_METADATA_ORDER)
    metadata_order_video: list[str] = _list_field(DEFAULT_METADATA_ORDER_VIDEO)

    # Container priority inside the embedded tags source
    tag_order: list[str] = _list_field(DEFAULT_TAG_ORDER)

    # Regex used to split genre/artist lists
    additional_delimiters: str | None = DEFAULT_ADDITIONAL_DELIMITERS

    # Release-group noise removed from video names
    common_abbr: list[str] = _list_field(DEFAULT_COMMON_ABBR)

    enable_custom_metadata: bool = False
    rating_file_tag_user: int | None = None

    site_charset: str = "UTF-8"
    detect_order: list[str] = _list_field(DEFAULT_DETECT_ORDER)
    detect_id3v2_encoding: bool = False

    log_file: Path | None = _path_field()

    _instance: ClassVar[Config | None] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects and normalize source names."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

        self.metadata_order = _as_name_list(self.metadata_order)
        self.metadata_order_video = _as_name_list(self.metadata_order_video)
        self.tag_order = _as_name_list(self.tag_order)
        self.common_abbr = _as_list(self.common_abbr)
        self.detect_order = _as_list(self.detect_order)
        if not self.additional_delimiters:
            self.additional_delimiters = None

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file."""
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_text(self._render_toml(config_dict), encoding="utf-8")
            logger.info("Configuration saved to %s", target)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []
        lines.append("# mediatag configuration file")
        lines.append("")

        lines.append("# Tag sources in priority order for music files")
        lines.append('# "tags" = embedded tags, "filename" = path patterns, others = plugins')
        lines.append(f"metadata_order = {self._format_toml_value(config['metadata_order'])}")
        lines.append("# Tag sources in priority order for movies, TV shows and clips")
        lines.append(
            f"metadata_order_video = {self._format_toml_value(config['metadata_order_video'])}"
        )
        lines.append("")

        lines.append("# Container priority inside the embedded tags source")
        lines.append(f"tag_order = {self._format_toml_value(config['tag_order'])}")
        lines.append("")

        lines.append("# Regular expression splitting multi-valued genre/artist tags")
        lines.append("# Empty string disables splitting")
        lines.append(
            f"additional_delimiters = {self._format_toml_value(config['additional_delimiters'] or '')}"
        )
        lines.append("")

        lines.append("# Release-group words stripped from movie and TV show names")
        lines.append(f"common_abbr = {self._format_toml_value(config['common_abbr'])}")
        lines.append("")

        lines.append("# Keep tags that have no canonical field")
        lines.append(
            f"enable_custom_metadata = {self._format_toml_value(config['enable_custom_metadata'])}"
        )
        lines.append("# User id owning ratings read from files (optional)")
        if config["rating_file_tag_user"] is not None:
            lines.append(
                f"rating_file_tag_user = {self._format_toml_value(config['rating_file_tag_user'])}"
            )
        lines.append("")

        lines.append("# Text encodings")
        lines.append(f"site_charset = {self._format_toml_value(config['site_charset'])}")
        lines.append(f"detect_order = {self._format_toml_value(config['detect_order'])}")
        lines.append(
            f"detect_id3v2_encoding = {self._format_toml_value(config['detect_id3v2_encoding'])}"
        )
        lines.append("")

        lines.append("# Log file path (optional)")
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            # JSON string escapes are valid TOML basic-string escapes.
            return json.dumps(str(value), ensure_ascii=False)
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._format_toml_value(item) for item in value) + "]"
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load configuration from file, creating the default one when missing."""
        if cls._instance is not None and (path is None or path == cls._loaded_from):
            return cls._instance

        config_file = path or default_config_path()

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                config_dict = {k: v for k, v in config_dict.items() if k in known}

                logger.debug("Configuration loaded from %s", config_file)
                instance = cls(**config_dict)
            else:
                instance = cls()
                _ = instance.save(config_file)
                logger.info("Created default configuration at %s", config_file)
        except (OSError, tomllib.TOMLDecodeError, TypeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next ``load`` re-reads the file."""
        cls._instance = None
        cls._loaded_from = None


def _as_list(value: object) -> list[str]:
    """Accept a list or a comma separated string."""
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        items = []
    return [item.strip() for item in items if item.strip()]


def _as_name_list(value: object) -> list[str]:
    """Like ``_as_list`` with source names lowercased."""
    return [item.lower() for item in _as_list(value)]


__all__ = [
    "Config",
    "DEFAULT_ADDITIONAL_DELIMITERS",
    "DEFAULT_COMMON_ABBR",
    "DEFAULT_DETECT_ORDER",
    "DEFAULT_METADATA_ORDER",
    "DEFAULT_METADATA_ORDER_VIDEO",
    "DEFAULT_TAG_ORDER",
]
