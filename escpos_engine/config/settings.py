"""
Job options loaded from a YAML file, e.g.

    profile: TMT20II
    encoding: cp437
    cut_after_print: true
    font_size: 1
    bold: false
    line_feeds_before: 1
    line_feeds_after: 1
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class PrinterProfile:
    name: str
    dots_per_line: int
    supports_qrcode: bool = True


PROFILES: Dict[str, PrinterProfile] = {
    "TMT20II": PrinterProfile("TMT20II", dots_per_line=576),
    "TMT88II": PrinterProfile("TMT88II", dots_per_line=512, supports_qrcode=False),
    "SOL802": PrinterProfile("SOL802", dots_per_line=576),
}


def get_profile(name: str) -> PrinterProfile:
    try:
        return PROFILES[name.upper()]
    except KeyError:
        raise ConfigError(f"unknown device type: {name} (expected one of {', '.join(PROFILES)})") from None


@dataclass
class JobSettings:
    profile: str = "TMT20II"
    encoding: str = "cp437"
    cut_after_print: bool = False
    font_size: int = 1
    bold: bool = False
    line_feeds_before: int = 1
    line_feeds_after: int = 1

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            expected = f.type
            # bool is an int subclass
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ConfigError(f"{f.name}: expected {expected.__name__}, got {value!r}")
        if not 1 <= self.font_size <= 8:
            raise ConfigError(f"font_size must be between 1 and 8, got {self.font_size}")
        if self.line_feeds_before < 0 or self.line_feeds_after < 0:
            raise ConfigError("line feed counts must not be negative")
        get_profile(self.profile)

    @property
    def printer(self) -> PrinterProfile:
        return get_profile(self.profile)


def load_settings(path: Optional[Path]) -> JobSettings:
    """Read options YAML; ``None`` gives the defaults."""
    if path is None:
        return JobSettings()
    try:
        data: Any = yaml.safe_load(Path(path).read_text()) or {}
    except OSError as exc:
        raise ConfigError(f"cannot read options file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    known = {f.name for f in fields(JobSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown option(s): {', '.join(unknown)}")
    return JobSettings(**data)
