"""Configuration loading and management for Code Sprawl.

Scoring constants (ideal sizes, weights, level thresholds) live in one
immutable ``SprawlConfig`` that is handed to the engine at construction.
Run-level settings (what to enumerate, how many workers) live in
``AnalysisConfig``. Sources are merged in priority order:
    1. Defaults (defined in the dataclasses)
    2. Project config (./code-sprawl.toml)
    3. Explicit config file
    4. Environment variables (SPRAWL_* prefix)
    5. Overrides passed as kwargs (CLI flags)

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
    >>> config.scoring.ideal_loc
    30
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class ScoreWeights:
    """Linear weights of the five sub-metrics. Must sum to 1.0."""

    size: float = 0.25
    complexity: float = 0.30
    duplication: float = 0.20
    responsibility: float = 0.15
    coupling: float = 0.10

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"weight '{f.name}' must be non-negative")
        total = self.size + self.complexity + self.duplication + self.responsibility + self.coupling
        if not 0.99 <= total <= 1.01:
            raise ValueError(f"Score weights must sum to 1.0, got {total:.3f}")


@dataclass(frozen=True)
class LevelThresholds:
    """Lower bounds of the mild, high and severe buckets.

    A score equal to a bound belongs to the bucket that starts there.
    """

    mild: float = 0.8
    high: float = 1.2
    severe: float = 1.6

    def __post_init__(self) -> None:
        if not 0.0 <= self.mild < self.high < self.severe:
            raise ValueError("Level thresholds must satisfy 0 <= mild < high < severe")


@dataclass(frozen=True)
class FlagThresholds:
    """Cut-offs for the secondary boolean detail flags."""

    long_file_lines: int = 50
    deep_nesting_columns: int = 16
    repetitive_ratio: float = 0.1
    high_coupling: float = 1.0
    many_responsibilities: float = 1.5


@dataclass(frozen=True)
class EntropySettings:
    """Tuning of the entropy penalty."""

    cap: float = 0.5
    pattern_weight: float = 0.5
    signature_weight: float = 0.3
    min_signatures: int = 3  # concentration only counts above this many

    def __post_init__(self) -> None:
        if not 0.0 <= self.cap <= 1.0:
            raise ValueError("entropy cap must be between 0.0 and 1.0")
        if self.min_signatures < 0:
            raise ValueError("min_signatures must be non-negative")


@dataclass(frozen=True)
class SprawlConfig:
    """Every constant the per-file scoring formula depends on.

    Attributes:
        ideal_loc: Line count of an "ideally small" file.
        cc_max: Cyclomatic complexity that maps to a complexity score of 1.0.
        ideal_responsibilities: Responsibility count that maps to 1.0.
        max_allowed_dependencies: Dependency count that maps to 1.0.
        min_lines: Files with fewer lines are skipped.
        min_duplicate_line_length: Normalized lines shorter than this are
            not considered for duplication.
        await_call_weight: Responsibility added per awaited call (0 = off).
        imported_symbol_weight: Dependencies added per imported binding
            name (0 = off).
    """

    ideal_loc: int = 30
    cc_max: int = 10
    ideal_responsibilities: int = 2
    max_allowed_dependencies: int = 5
    min_lines: int = 5
    min_duplicate_line_length: int = 11
    await_call_weight: float = 0.0
    imported_symbol_weight: float = 0.0

    weights: ScoreWeights = field(default_factory=ScoreWeights)
    thresholds: LevelThresholds = field(default_factory=LevelThresholds)
    flags: FlagThresholds = field(default_factory=FlagThresholds)
    entropy: EntropySettings = field(default_factory=EntropySettings)

    def __post_init__(self) -> None:
        for name in ("ideal_loc", "cc_max", "ideal_responsibilities", "max_allowed_dependencies"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.min_lines < 0:
            raise ValueError("min_lines must be non-negative")
        if self.await_call_weight < 0 or self.imported_symbol_weight < 0:
            raise ValueError("variant weights must be non-negative")


DEFAULT_SPRAWL_CONFIG = SprawlConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        File selection:
            extensions: File suffixes to analyze
            exclude_dirs: Directory names never descended into
            exclude_patterns: File globs (Path.match) to skip
            max_file_size_mb: Larger files are skipped
            max_files: Enumeration stops after this many candidates
            follow_symlinks: Yield symlinked files that resolve inside root

        Execution:
            workers: Size of the per-file worker pool (1 = inline)

        Enrichment:
            enable_line_counter: Run the external ``cloc`` line counter
            line_counter_timeout: Seconds before the line counter is abandoned

        Output control:
            verbosity: Logging verbosity level

        Scoring:
            scoring: Immutable scoring constants
    """

    extensions: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
    exclude_dirs: tuple[str, ...] = (
        "node_modules",
        "dist",
        "build",
        ".git",
        "coverage",
        "vendor",
    )
    exclude_patterns: tuple[str, ...] = ("*.min.js", "*.bundle.js")
    max_file_size_mb: float = 10.0
    max_files: int = 10000
    follow_symlinks: bool = False

    workers: int = _DEFAULT_WORKERS

    enable_line_counter: bool = False
    line_counter_timeout: int = 120

    verbosity: Verbosity = "normal"

    scoring: SprawlConfig = field(default_factory=SprawlConfig)

    def __post_init__(self) -> None:
        if not self.extensions:
            raise ValueError("extensions must not be empty")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.max_files < 1:
            raise ValueError("max_files must be at least 1")
        if self.line_counter_timeout < 1:
            raise ValueError("line_counter_timeout must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"unknown verbosity '{self.verbosity}'")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


_SCORING_SECTIONS = {
    "weights": ScoreWeights,
    "thresholds": LevelThresholds,
    "flags": FlagThresholds,
    "entropy": EntropySettings,
}

_TUPLE_FIELDS = ("extensions", "exclude_dirs", "exclude_patterns")


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are translated to ``verbosity``.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid
    """
    merged: dict = {}

    project_config = Path.cwd() / "code-sprawl.toml"
    if project_config.exists():
        try:
            _merge_tables(merged, _load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            _merge_tables(merged, _load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    scoring = merged.pop("scoring", None)
    if scoring is not None:
        merged["scoring"] = _build_scoring(scoring)

    for name in _TUPLE_FIELDS:
        if name in merged and isinstance(merged[name], list):
            merged[name] = tuple(merged[name])

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_tables(base: dict, incoming: dict) -> dict:
    """Merge ``incoming`` into ``base`` in place; nested tables merge by key."""
    for key, value in incoming.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge_tables(current, value)
        else:
            base[key] = value
    return base


def _build_scoring(value: Any) -> SprawlConfig:
    """Turn a ``[scoring]`` TOML table into a SprawlConfig."""
    if isinstance(value, SprawlConfig):
        return value
    if not isinstance(value, dict):
        raise ConfigurationError("[scoring] must be a table")

    kwargs = dict(value)
    try:
        for section, cls in _SCORING_SECTIONS.items():
            if section in kwargs:
                kwargs[section] = cls(**kwargs[section])
        return SprawlConfig(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [scoring] config: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SPRAWL_* environment variables.

    Only scalar AnalysisConfig fields are read (SPRAWL_WORKERS,
    SPRAWL_MAX_FILES, SPRAWL_ENABLE_LINE_COUNTER, SPRAWL_VERBOSITY, ...).
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"SPRAWL_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for field types that cannot be expressed in one variable.
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    with open(path, "rb") as f:
        return tomllib.load(f)
