"""AWS Lambda entry point, subscribed to the lifecycle hook's SNS topic."""
import json
import logging
from typing import Any, Dict
from .events import parse_event
from .logging_util import setup_logging
from .orchestrator import process

log = logging.getLogger(__name__)

def handler(event: Dict[str, Any], context: Any) -> Dict[str, str]:
    setup_logging()
    lifecycle_event = parse_event(json.dumps(event))
    request_id = getattr(context, "aws_request_id", None)
    log.info("Handling %s for %s (request=%s)", lifecycle_event.transition,
             lifecycle_event.instance_id, request_id)

    # Errors propagate so Lambda marks the invocation as failed.
    outcome = process(lifecycle_event)
    return {
        "instance_id": lifecycle_event.instance_id,
        "outcome": outcome.value if outcome is not None else "IGNORED",
    }
