import logging
import time
from botocore.exceptions import BotoCoreError, ClientError
from .. import config
from ..aws_utils import publish_message, complete_lifecycle_action
from ..common import describe_client_error
from ..errors import CompletionFailed, ResubmissionFailed
from ..eventlog import record
from ..models import LifecycleEvent, ResolutionOutcome

log = logging.getLogger(__name__)

def resubmit(event: LifecycleEvent) -> None:
    """Republish the untouched SNS message so the pipeline runs again later."""
    if config.RESUBMIT_DELAY_SEC > 0:
        time.sleep(config.RESUBMIT_DELAY_SEC)
    try:
        publish_message(event.topic_arn, event.raw_message, config.RESUBMIT_SUBJECT)
    except (ClientError, BotoCoreError) as exc:
        raise ResubmissionFailed(
            f"Republishing to {event.topic_arn} failed: {describe_client_error(exc)}") from exc
    record("resolve", "resubmitted", event.instance_id)
    log.info("Resubmitted lifecycle message; tasks will be checked again.")

def complete(event: LifecycleEvent) -> None:
    try:
        complete_lifecycle_action(event.group_name, event.hook_name, event.instance_id,
                                  config.LIFECYCLE_ACTION_RESULT)
    except (ClientError, BotoCoreError) as exc:
        raise CompletionFailed(
            f"Completing hook {event.hook_name} for {event.instance_id} failed: "
            f"{describe_client_error(exc)}") from exc
    record("resolve", "completed", event.instance_id)
    log.info("Complete lifecycle action.")

def execute(event: LifecycleEvent, outcome: ResolutionOutcome, dry_run: bool = False) -> None:
    if outcome is ResolutionOutcome.MANAGED_WORK_REMAINS:
        log.info("Service tasks are still running.")
        if dry_run:
            log.info("[DRY RUN] Would republish the lifecycle message to %s", event.topic_arn)
            return
        resubmit(event)
    else:
        log.info("No service tasks remain on container instance.")
        if dry_run:
            log.info("[DRY RUN] Would complete hook %s for %s with %s",
                     event.hook_name, event.instance_id, config.LIFECYCLE_ACTION_RESULT)
            return
        complete(event)
