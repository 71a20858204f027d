"""Quartiles solver configuration."""

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class SolverConfig(BaseSettings):
    """Configuration settings for the Quartiles solver."""

    dictionary_dir: str = "dict"
    """Directory holding the dictionary files. Default: "dict"."""

    dictionary_name: str = "english"
    """Dictionary name shared by the text and binary files, sans extension. Default: "english"."""

    time_slice: float = Field(default=0.005, ge=0)
    """Time budget (in seconds) for each call to `Solver.advance`. Default: 0.005."""

    log_dir: str = "logs"
    """Directory under which per-board solver transcripts are written. Default: "logs"."""

    report_interval: int = Field(default=1000, ge=0)
    """Interval (in number of time slices) at which progress is written to the transcript.

    0 disables progress lines. Default: 1000.
    """

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="QUARTILES_",
        extra="forbid",
    )


config = SolverConfig()
