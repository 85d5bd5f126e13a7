import enum
from typing import Annotated, Self

import pydantic


class ConfigSource(enum.StrEnum):
    """Where the effective configuration was read from."""

    EXPLICIT = "explicit"
    ENV = "env"
    LOCAL = "local"
    GLOBAL = "global"
    DEFAULT = "default"


class AnalysisConfig(pydantic.BaseModel):
    """Analysis defaults."""

    model_config = pydantic.ConfigDict(extra="forbid")

    default_source: Annotated[int, pydantic.Field(ge=0)] = 0
    show_paths: bool = True


class DisplayConfig(pydantic.BaseModel):
    """Display formatting configuration."""

    model_config = pydantic.ConfigDict(extra="forbid")

    precision: Annotated[int, pydantic.Field(ge=0, le=9)] = 3
    color: bool | None = None


class CritpathConfig(pydantic.BaseModel):
    """Complete critpath configuration schema."""

    model_config = pydantic.ConfigDict(extra="forbid")

    analysis: AnalysisConfig = pydantic.Field(default_factory=AnalysisConfig)
    display: DisplayConfig = pydantic.Field(default_factory=DisplayConfig)

    @classmethod
    def get_default(cls) -> Self:
        """Get default configuration."""
        return cls()


# Config keys with descriptions (shown by `critpath config`)
CONFIG_KEY_DESCRIPTIONS: dict[str, str] = {
    "analysis.default_source": "Source vertex when the graph file has none",
    "analysis.show_paths": "Print the path to every reached component",
    "display.precision": "Decimal places for millisecond timings",
    "display.color": "Force colored output on/off (unset: auto-detect)",
}
