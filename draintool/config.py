import os
from pathlib import Path
from typing import Dict, Optional

# Local overrides for CLI runs; the Lambda gets its settings from the function configuration.
ENV_FILES = (".env", ".env.local")


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines (optionally prefixed with `export`); comments and junk lines are skipped."""
    values: Dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):]
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("'\"")
    return values


def _optional_path(env_key: str) -> Optional[Path]:
    value = os.getenv(env_key, "").strip()
    return Path(value) if value else None


# The process environment wins over anything in the files.
for _name in ENV_FILES:
    if Path(_name).is_file():
        for _key, _value in read_env_file(Path(_name)).items():
            os.environ.setdefault(_key, _value)

# Lambda sets AWS_REGION; REGION is accepted for local runs.
REGION = os.getenv("AWS_REGION") or os.getenv("REGION", "us-east-1")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = _optional_path("LOG_FILE")
EVENTS_LOG_FILE = _optional_path("EVENTS_LOG_FILE")

# Lifecycle hook handling
TERMINATING_TRANSITION = "autoscaling:EC2_INSTANCE_TERMINATING"
LIFECYCLE_ACTION_RESULT = "CONTINUE"

# Tasks whose group starts with this prefix belong to an ECS service and are
# rescheduled elsewhere once the instance is DRAINING.
SERVICE_GROUP_PREFIX = os.getenv("SERVICE_GROUP_PREFIX", "service:")
STOP_REASON = os.getenv("STOP_REASON", "Drain container instance")

RESUBMIT_SUBJECT = os.getenv("RESUBMIT_SUBJECT", "Publishing SNS message to invoke lambda again..")
RESUBMIT_DELAY_SEC = int(os.getenv("RESUBMIT_DELAY_SEC", "1"))

# ECS Describe* calls accept at most 100 ARNs
DESCRIBE_BATCH_SIZE = 100
