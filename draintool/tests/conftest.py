"""
Shared fixtures for the draintool tests.

No test talks to AWS: the module-level boto3 clients in draintool.aws_utils
are replaced with MagicMocks, and the payload builders below produce the same
SNS-to-Lambda envelope Auto Scaling lifecycle hooks deliver.
"""
import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:ecs-drain-hook"
INSTANCE_ID = "i-0123456789abcdef0"
CLUSTER = "prod-cluster"
TERMINATING = "autoscaling:EC2_INSTANCE_TERMINATING"


def build_message(transition=TERMINATING, instance_id=INSTANCE_ID, metadata=None, **overrides) -> str:
    """Inner lifecycle message, deliberately not in json.dumps' default layout."""
    if metadata is None:
        metadata = json.dumps({"ClusterName": CLUSTER})
    msg = {
        "Origin": "AutoScalingGroup",
        "LifecycleHookName": "ecs-drain",
        "AccountId": "123456789012",
        "RequestId": "5c7c8f0e-1234-4a5b-9c3d-0e1f2a3b4c5d",
        "LifecycleTransition": transition,
        "AutoScalingGroupName": "ecs-asg",
        "Service": "AWS Auto Scaling",
        "Time": "2026-10-19T03:46:00.000Z",
        "EC2InstanceId": instance_id,
        "LifecycleActionToken": "87654321-4321-4321-4321-210987654321",
        "NotificationMetadata": metadata,
    }
    msg.update(overrides)
    msg = {k: v for k, v in msg.items() if v is not None}
    return json.dumps(msg, separators=(", ", " : "))


def build_envelope(message: str, topic_arn=TOPIC_ARN, records=1) -> dict:
    record = {
        "EventSource": "aws:sns",
        "EventVersion": "1.0",
        "Sns": {
            "Type": "Notification",
            "MessageId": "95df01b4-ee98-5cb9-9903-4c221d41eb5e",
            "TopicArn": topic_arn,
            "Subject": "Auto Scaling:  Lifecycle action 'TERMINATING' for instance in progress.",
            "Message": message,
            "Timestamp": "2026-10-19T03:46:01.000Z",
        },
    }
    return {"Records": [record] * records}


@pytest.fixture
def message():
    return build_message()


@pytest.fixture
def payload(message):
    return json.dumps(build_envelope(message))


def container_instance(instance_id=INSTANCE_ID, status="ACTIVE", suffix="abc"):
    return {
        "containerInstanceArn": f"arn:aws:ecs:us-east-1:123456789012:container-instance/{CLUSTER}/{suffix}",
        "ec2InstanceId": instance_id,
        "status": status,
        "runningTasksCount": 0,
        "pendingTasksCount": 0,
    }


def task(name, group):
    return {
        "taskArn": f"arn:aws:ecs:us-east-1:123456789012:task/{CLUSTER}/{name}",
        "group": group,
        "lastStatus": "RUNNING",
    }


@pytest.fixture
def aws(monkeypatch):
    """
    Patch ecs_client, asg_client & sns_client in aws_utils and yield their mocks.
    Every call used by the pipeline returns an empty response unless a test
    overrides it; the journal is off and resubmission does not sleep.
    """
    monkeypatch.setattr("draintool.config.RESUBMIT_DELAY_SEC", 0)
    monkeypatch.setattr("draintool.config.EVENTS_LOG_FILE", None)
    with patch("draintool.aws_utils.ecs_client") as ecs, \
            patch("draintool.aws_utils.asg_client") as asg, \
            patch("draintool.aws_utils.sns_client") as sns:
        for name in ("list_container_instances", "describe_container_instances",
                     "update_container_instances_state", "list_tasks", "describe_tasks", "stop_task"):
            getattr(ecs, name).return_value = {}
        asg.complete_lifecycle_action.return_value = {}
        sns.publish.return_value = {"MessageId": "msg-1"}
        yield SimpleNamespace(ecs=ecs, asg=asg, sns=sns)


def place(aws, node=None, tasks=None):
    """Configure the ECS mock with one container instance and its tasks."""
    node = node or container_instance()
    aws.ecs.list_container_instances.return_value = {"containerInstanceArns": [node["containerInstanceArn"]]}
    aws.ecs.describe_container_instances.return_value = {"containerInstances": [node], "failures": []}
    tasks = tasks or []
    aws.ecs.list_tasks.return_value = {"taskArns": [t["taskArn"] for t in tasks]}
    aws.ecs.describe_tasks.return_value = {"tasks": tasks, "failures": []}
    return node


def total_calls(mock: MagicMock) -> int:
    return len(mock.method_calls)
