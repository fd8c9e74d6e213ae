import logging
from botocore.exceptions import BotoCoreError, ClientError
from ..aws_utils import set_draining
from ..common import describe_client_error
from ..errors import DrainTransitionFailed
from ..eventlog import record
from ..models import NodeHandle

log = logging.getLogger(__name__)

def execute(cluster: str, node: NodeHandle, dry_run: bool = False) -> bool:
    """
    Move the container instance to DRAINING.
    Returns False without calling ECS when it is already draining.
    """
    if node.is_draining:
        log.info("Container instance %s is already DRAINING.", node.instance_id)
        return False

    if dry_run:
        log.info("[DRY RUN] Would set %s (%s) to DRAINING", node.instance_id, node.arn)
        return False

    log.info("Draining container instance...")
    record("drain", "requested", node.instance_id, previous_status=node.status)
    try:
        failures = set_draining(cluster, node.arn)
    except (ClientError, BotoCoreError) as exc:
        raise DrainTransitionFailed(
            f"Setting {node.arn} to DRAINING failed: {describe_client_error(exc)}") from exc
    if failures:
        reasons = ", ".join(f"{f.get('arn')}: {f.get('reason')}" for f in failures)
        raise DrainTransitionFailed(f"Setting {node.arn} to DRAINING failed: {reasons}")

    node.status = "DRAINING"
    return True
