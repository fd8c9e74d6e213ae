from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional
from .config import SERVICE_GROUP_PREFIX, TERMINATING_TRANSITION

@dataclass(frozen=True)
class LifecycleEvent:
    instance_id:  str
    transition:   str
    group_name:   str
    hook_name:    str
    cluster_name: str
    # SNS topic the notification arrived on; resubmission publishes back to it
    topic_arn:    str
    # SNS Message string exactly as received, forwarded verbatim on resubmission
    raw_message:  str

    @property
    def is_terminating(self) -> bool:
        return self.transition == TERMINATING_TRANSITION

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class NodeHandle:
    arn:                 str
    instance_id:         Optional[str]
    status:              str
    running_tasks_count: int = 0
    pending_tasks_count: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "NodeHandle":
        """Build from one entry of ecs.describe_container_instances()['containerInstances']."""
        return cls(
            arn=data["containerInstanceArn"],
            instance_id=data.get("ec2InstanceId") or None,
            status=data.get("status", ""),
            running_tasks_count=data.get("runningTasksCount", 0),
            pending_tasks_count=data.get("pendingTasksCount", 0),
        )

    @property
    def is_draining(self) -> bool:
        return self.status == "DRAINING"


@dataclass
class Workload:
    arn:         str
    group:       str = ""
    last_status: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Workload":
        """Build from one entry of ecs.describe_tasks()['tasks']."""
        return cls(
            arn=data["taskArn"],
            group=data.get("group") or "",
            last_status=data.get("lastStatus", ""),
        )

    @property
    def is_managed(self) -> bool:
        return self.group.startswith(SERVICE_GROUP_PREFIX)

    def __str__(self):
        kind = "managed" if self.is_managed else "standalone"
        return f"Task {self.arn} ({kind}, group={self.group or '-'}, status={self.last_status or '-'})"


class ResolutionOutcome(str, Enum):
    MANAGED_WORK_REMAINS = "MANAGED_WORK_REMAINS"
    NO_MANAGED_WORK = "NO_MANAGED_WORK"
