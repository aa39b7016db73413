"""Data models for package pinning."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class PackageSpec:
    """A package name taken from one input line, annotation stripped."""
    name: str
    raw: str


@dataclass(frozen=True)
class DistributionInfo:
    """Identity and release of the distribution described by an os-release file."""
    identifier: str
    release: str  # "v<major>.<minor>" or "" when VERSION_ID is missing

    def matches(self, desired: str) -> bool:
        return self.identifier.lower() == desired.lower()


@dataclass(frozen=True)
class VersionedPackage:
    """A package and the version the catalog reported for it."""
    name: str
    version: str

    @property
    def line(self) -> str:
        return f"{self.name}={self.version}"


@dataclass
class PinResult:
    """Outcome of one pipeline run."""
    branch: str
    output_path: str
    resolved: List[VersionedPackage] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    committed: bool = False

    @property
    def attempted(self) -> int:
        return len(self.resolved) + len(self.missing)
