import logging
from typing import List
from botocore.exceptions import BotoCoreError, ClientError
from ..aws_utils import list_task_arns, describe_tasks, stop_task
from ..common import describe_client_error
from ..config import STOP_REASON
from ..errors import WorkloadQueryFailed, WorkloadStopFailed
from ..eventlog import record
from ..models import NodeHandle, ResolutionOutcome, Workload

log = logging.getLogger(__name__)

def query_tasks(cluster: str, node: NodeHandle) -> List[Workload]:
    """Every task placed on the container instance, described."""
    try:
        task_arns = list_task_arns(cluster, node.arn)
        return describe_tasks(cluster, task_arns) if task_arns else []
    except (ClientError, BotoCoreError) as exc:
        raise WorkloadQueryFailed(
            f"Querying tasks on {node.arn} failed: {describe_client_error(exc)}") from exc

def execute(cluster: str, node: NodeHandle, dry_run: bool = False) -> ResolutionOutcome:
    """
    Stop every standalone task on the node and report whether service-owned
    tasks are still waiting to be rescheduled.

    A failed stop aborts the whole audit. Stops that already went through are
    not tracked; the next pass simply requests them again.
    """
    log.info("Checking running tasks on container instance.")
    tasks = query_tasks(cluster, node)

    managed = 0
    for task in tasks:
        if task.is_managed:
            managed += 1
            continue
        if dry_run:
            log.info("[DRY RUN] Would stop %s", task)
            continue
        try:
            stop_task(cluster, task.arn, STOP_REASON)
        except (ClientError, BotoCoreError) as exc:
            raise WorkloadStopFailed(
                task.arn, f"Stopping {task.arn} failed: {describe_client_error(exc)}") from exc
        record("audit", "stopped", node.instance_id, task=task.arn)

    log.info("Running task count: %d", managed)
    if managed > 0:
        return ResolutionOutcome.MANAGED_WORK_REMAINS
    return ResolutionOutcome.NO_MANAGED_WORK
