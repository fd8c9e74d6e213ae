import logging
from typing import Any, Dict, List
from .common import make_ecs_client, make_autoscaling_client, make_sns_client
from .config import DESCRIBE_BATCH_SIZE
from .errors import WorkloadQueryFailed
from .models import NodeHandle, Workload
from .utils import paginated, chunked

log = logging.getLogger(__name__)

ecs_client = make_ecs_client()
asg_client = make_autoscaling_client()
sns_client = make_sns_client()

# ---------------------------------------------------------------------------
# ECS: container instances
# ---------------------------------------------------------------------------
def list_container_instance_arns(cluster: str) -> List[str]:
    return list(paginated(ecs_client.list_container_instances, "containerInstanceArns",
                          cluster=cluster))

def describe_container_instances(cluster: str, arns: List[str]) -> List[NodeHandle]:
    nodes: List[NodeHandle] = []
    for batch in chunked(arns, DESCRIBE_BATCH_SIZE):
        resp = ecs_client.describe_container_instances(cluster=cluster, containerInstances=batch)
        for failure in resp.get("failures", []):
            log.warning("describe_container_instances failure: arn=%s reason=%s",
                        failure.get("arn"), failure.get("reason"))
        nodes.extend(NodeHandle.from_api(ci) for ci in resp.get("containerInstances", []))
    return nodes

def set_draining(cluster: str, arn: str) -> List[Dict[str, Any]]:
    """Request the DRAINING status; returns the per-instance failures ECS reported."""
    resp = ecs_client.update_container_instances_state(
        cluster=cluster,
        containerInstances=[arn],
        status="DRAINING",
    )
    return resp.get("failures", [])

# ---------------------------------------------------------------------------
# ECS: tasks
# ---------------------------------------------------------------------------
def list_task_arns(cluster: str, container_instance_arn: str) -> List[str]:
    return list(paginated(ecs_client.list_tasks, "taskArns",
                          cluster=cluster, containerInstance=container_instance_arn))

def describe_tasks(cluster: str, arns: List[str]) -> List[Workload]:
    tasks: List[Workload] = []
    for batch in chunked(arns, DESCRIBE_BATCH_SIZE):
        resp = ecs_client.describe_tasks(cluster=cluster, tasks=batch)
        failures = resp.get("failures", [])
        for failure in failures:
            log.warning("describe_tasks failure: arn=%s reason=%s",
                        failure.get("arn"), failure.get("reason"))
        # MISSING means the task is already gone; anything else may hide a service task
        unknown = [f for f in failures if f.get("reason") != "MISSING"]
        if unknown:
            reasons = ", ".join(f"{f.get('arn')}: {f.get('reason')}" for f in unknown)
            raise WorkloadQueryFailed(f"Describing tasks in {cluster} failed: {reasons}")
        tasks.extend(Workload.from_api(t) for t in resp.get("tasks", []))
    return tasks

def stop_task(cluster: str, task_arn: str, reason: str) -> None:
    ecs_client.stop_task(cluster=cluster, task=task_arn, reason=reason)
    log.info("Requested stop for task %s (reason=%s)", task_arn, reason)

# ---------------------------------------------------------------------------
# SNS / Auto Scaling
# ---------------------------------------------------------------------------
def publish_message(topic_arn: str, message: str, subject: str) -> str:
    resp = sns_client.publish(TopicArn=topic_arn, Message=message, Subject=subject)
    message_id = resp.get("MessageId", "")
    log.info("Published message %s to %s", message_id, topic_arn)
    return message_id

def complete_lifecycle_action(group_name: str, hook_name: str, instance_id: str, result: str) -> None:
    asg_client.complete_lifecycle_action(
        AutoScalingGroupName=group_name,
        LifecycleHookName=hook_name,
        InstanceId=instance_id,
        LifecycleActionResult=result,
    )
    log.info("Completed lifecycle hook %s for %s in %s with %s", hook_name, instance_id, group_name, result)
