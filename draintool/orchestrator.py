import logging
from typing import Optional, Union
from .events import parse_event
from .models import LifecycleEvent, ResolutionOutcome
from .phases import locate, drain, audit, resolve

log = logging.getLogger(__name__)

def process(event: LifecycleEvent, dry_run: bool = False) -> Optional[ResolutionOutcome]:
    """
    One drain pass for a decoded lifecycle event.

    Returns None when the transition is not a termination (nothing is called),
    otherwise the outcome that was acted on: MANAGED_WORK_REMAINS after the
    message was republished, NO_MANAGED_WORK after the hook was completed.
    """
    if not event.is_terminating:
        log.info("Ignoring lifecycle transition %s for %s.", event.transition, event.instance_id)
        return None

    cluster = event.cluster_name
    log.info("Check container instance status...")
    node = locate.execute(cluster, event.instance_id)
    log.info("Container instance %s is %s.", event.instance_id, node.status)

    drain.execute(cluster, node, dry_run=dry_run)
    outcome = audit.execute(cluster, node, dry_run=dry_run)
    resolve.execute(event, outcome, dry_run=dry_run)
    return outcome

def run(payload: Union[str, bytes], dry_run: bool = False) -> Optional[ResolutionOutcome]:
    event = parse_event(payload)
    return process(event, dry_run=dry_run)
