from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Execution Policy
    # Enforcement is the safe default; guided must be asked for explicitly
    DEFAULT_MODE: Literal["enforcement", "guided"] = "enforcement"
    MAX_ITERATION_MULTIPLIER: int = Field(10, ge=1)

    # Command Execution
    SHELL: str = "sh"
    # capture: output is collected so 'quiet' can hide it
    # inherit: commands talk to the terminal directly (interactive tools)
    OUTPUT_DISCIPLINE: Literal["capture", "inherit"] = "capture"

    # Diagnostics
    LOG_LEVEL: str = "WARNING"

    # Loads WORKFLOW_* variables, optionally from a .env file in the working directory
    model_config = SettingsConfigDict(env_prefix="WORKFLOW_", env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
