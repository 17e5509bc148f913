"""
Domain entity identifying one Pulumi ESC environment.
Zero external dependencies — pure Python dataclass only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentReference:
    organization: str
    environment: str

    def __post_init__(self) -> None:
        if not self.organization or not self.organization.strip():
            raise ValueError("organization must be a non-empty string")
        if not self.environment or not self.environment.strip():
            raise ValueError("environment must be a non-empty string")

    def __str__(self) -> str:
        return f"{self.organization}/{self.environment}"
