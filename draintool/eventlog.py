"""
Optional JSONL journal of the actions a drain pass took against AWS.

Each line is one action: {"ts", "phase", "action", "instance", ...extra}.
The journal is off unless EVENTS_LOG_FILE is set.
"""
import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Optional
from . import config

log = logging.getLogger(__name__)

_write_lock = threading.Lock()


def journal_path() -> Optional[Path]:
    return config.EVENTS_LOG_FILE

def record(phase: str, action: str, instance: Optional[str], **extra: Any) -> None:
    """Append one action to the journal. Failing to write is reported but never stops the drain."""
    path = journal_path()
    if path is None:
        return
    entry = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "phase": phase,
        "action": action,
        "instance": instance,
        **extra,
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with _write_lock, path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(entry, separators=(",", ":")) + "\n")
    except OSError as exc:
        log.warning("Journal %s not written (%s %s): %s", path, phase, action, exc)
