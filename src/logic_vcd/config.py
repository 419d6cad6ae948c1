"""Output configuration."""

from __future__ import annotations

from dataclasses import dataclass

VERSION = "0.1.0"


@dataclass
class OutputConfig:
    """Identity written into the VCD header."""

    package: str = "logic-vcd"
    version: str = VERSION
    module_name: str | None = None  # $scope module name, defaults to package

    @property
    def scope(self) -> str:
        return self.module_name or self.package
