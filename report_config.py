"""Default formatter options, overridable from the environment or a .env file.

Precedence: options set on the suite configuration, then environment
variables, then the built-in defaults below.

Env:
  - BENCH_HTML_FILE           base path of the index page
  - BENCH_HTML_AUTO_OPEN      1/0, open the index page after writing
  - BENCH_HTML_INLINE_ASSETS  1/0, embed CSS/JS instead of copying assets/
  - BENCH_HTML_UNIT_SCALING   best|largest|smallest|none
"""

import os
import sys
from typing import Any, Dict, Optional

from dotenv import load_dotenv


def load_env_file(path: str = ".env") -> bool:
    """Optional step: a missing or unreadable .env only leaves env as is."""
    if not os.path.exists(path):
        return False
    try:
        return load_dotenv(path)
    except OSError as e:
        print(f"[warn] Could not load {path}: {e}", file=sys.stderr)
        return False


load_env_file()

DEFAULT_FILE = "benchmarks/output/results.html"
DEFAULT_AUTO_OPEN = True
DEFAULT_INLINE_ASSETS = False
DEFAULT_UNIT_SCALING = "best"

UNIT_SCALING_STRATEGIES = ("best", "largest", "smallest", "none")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def env_defaults() -> Dict[str, Any]:
    """Built-in defaults with environment overrides applied."""
    return {
        "file": os.getenv("BENCH_HTML_FILE", "").strip() or DEFAULT_FILE,
        "auto_open": env_flag("BENCH_HTML_AUTO_OPEN", DEFAULT_AUTO_OPEN),
        "inline_assets": env_flag("BENCH_HTML_INLINE_ASSETS", DEFAULT_INLINE_ASSETS),
        "unit_scaling": os.getenv("BENCH_HTML_UNIT_SCALING", "").strip() or DEFAULT_UNIT_SCALING,
    }


def resolve_options(configured: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Fill missing formatter options; values that are ``None`` count as missing."""
    options = env_defaults()
    for key, value in (configured or {}).items():
        if value is not None:
            options[key] = value
    if options["unit_scaling"] not in UNIT_SCALING_STRATEGIES:
        raise ValueError(
            f"unit_scaling must be one of {', '.join(UNIT_SCALING_STRATEGIES)}, "
            f"got {options['unit_scaling']!r}"
        )
    return options
