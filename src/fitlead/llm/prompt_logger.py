"""
Fitlead - Prompt Logger.

Writes each diet plan generation call (prompts plus outcome) to a markdown
file under prompt_logs/<run>/, numbered in call order. Off unless
FITLEAD_LOG_PROMPTS=1 or the --log-prompts CLI flag turns it on.
"""

import os
from datetime import datetime
from pathlib import Path

LOG_PROMPTS = os.getenv("FITLEAD_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

_run_dir_name: str | None = None
_calls: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    global LOG_PROMPTS
    LOG_PROMPTS = enabled


def _run_dir() -> Path:
    global _run_dir_name
    if _run_dir_name is None:
        _run_dir_name = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = LOG_DIR / _run_dir_name
    path.mkdir(parents=True, exist_ok=True)
    return path


def _outcome(response: str | None, error: str | None) -> str:
    if error:
        return f"**ERROR:** {error}"
    return response or "(empty completion)"


def log_prompt(
    *,
    model: str,
    system_prompt: str,
    user_prompt: str,
    response: str | None = None,
    error: str | None = None,
) -> Path | None:
    """Record one generation call. Returns the file written, or None when disabled."""
    if not LOG_PROMPTS:
        return None

    global _calls
    _calls += 1

    sections = [
        f"# Diet plan generation #{_calls}",
        f"- model: `{model}`\n- at: {datetime.now().isoformat(timespec='seconds')}",
        f"## System\n\n{system_prompt.strip()}",
        f"## Client profile prompt\n\n{user_prompt.strip()}",
        f"## Outcome\n\n{_outcome(response, error)}",
    ]

    path = _run_dir() / f"{_calls:02d}_generate.md"
    path.write_text("\n\n".join(sections) + "\n", encoding="utf-8")
    return path


def get_session_log_dir() -> Path | None:
    """Directory this run logs into, or None when logging is off."""
    return _run_dir() if LOG_PROMPTS else None


def reset_session() -> None:
    """Start a fresh run directory and counter."""
    global _run_dir_name, _calls
    _run_dir_name = None
    _calls = 0
