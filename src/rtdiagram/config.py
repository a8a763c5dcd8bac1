"""Configuration management for rtdiagram using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rtdiagram.errors import ConfigurationError

CONFIG_FILE_NAME = ".rtdiagram.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class OutputConfig(BaseModel):
    """Output configuration section."""
    dir: str = "diagrams"
    class_diagram_file: str = Field(alias="classDiagramFile", default="class.puml")
    composition_file: str = Field(alias="compositionFile", default="composition.puml")
    state_machine_file: str = Field(alias="stateMachineFile", default="statemachine.puml")

    @field_validator("class_diagram_file", "composition_file", "state_machine_file")
    @classmethod
    def validate_file_name(cls, v):
        """Document names must be plain file names, never paths."""
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"document file name must be a plain file name, got: {v!r}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class DiagramsConfig(BaseModel):
    """Diagram emission configuration section."""
    skinparams: list[str] = Field(default_factory=lambda: ["componentstyle uml2"])
    indent: str = "\t"
    emit_guards: bool = Field(alias="emitGuards", default=False)

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v):
        if not v or v.strip():
            raise ValueError("indent must be a non-empty whitespace string")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class RtDiagramConfig(BaseModel):
    """Complete rtdiagram configuration model."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    diagrams: DiagramsConfig = Field(default_factory=DiagramsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> RtDiagramConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .rtdiagram.json

    Returns:
        RtDiagramConfig: Loaded and validated configuration

    Raises:
        ConfigurationError: If the file is not valid JSON or fails validation
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return RtDiagramConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

    return RtDiagramConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .rtdiagram.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
