"""Configuration dataclasses for the screenshot framing tool."""
from dataclasses import dataclass, field


@dataclass
class OutputConfig:
    """Where framed screenshots are written and how they are encoded."""

    directory: str = "framed"
    suffix: str = "-framed"
    compression_level: int = 1


@dataclass
class RunnerConfig:
    """Batch execution controls."""

    workers: int = 1
    default_frame: str = "iphone"


@dataclass
class CLIConfig:
    """Console presentation defaults."""

    quiet: bool = False
    verbose: bool = False
    no_color: bool = False


@dataclass
class AppConfig:
    """Top-level application configuration."""

    output: OutputConfig = field(default_factory=OutputConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
