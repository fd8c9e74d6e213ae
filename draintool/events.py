"""
Decoding of Auto Scaling lifecycle notifications delivered through SNS.

The Lambda event is three JSON layers deep::

    {"Records": [{"Sns": {"TopicArn": ..., "Message": "<json string>"}}]}
                                                      |
        {"EC2InstanceId": ..., "LifecycleTransition": ..., "NotificationMetadata": "<json string>"}
                                                                                  |
                                                              {"ClusterName": ...}

Each layer is validated on its own and any problem is reported as
MalformedEvent naming the offending field.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Union
from .errors import MalformedEvent
from .models import LifecycleEvent

log = logging.getLogger(__name__)

CLUSTER_NAME_KEY = "ClusterName"


def _loads_object(text: Union[str, bytes], field: str) -> Dict[str, Any]:
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedEvent(field, "is not valid UTF-8") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedEvent(field, f"is not valid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise MalformedEvent(field, "is not a JSON object")
    return data

def _require_str(data: Dict[str, Any], key: str, layer: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedEvent(f"{layer}.{key}")
    if not value.strip():
        raise MalformedEvent(f"{layer}.{key}", "is empty")
    return value

def _require_str_ci(data: Dict[str, Any], key: str, layer: str) -> str:
    """Like _require_str, but the key is matched case-insensitively."""
    if key in data:
        return _require_str(data, key, layer)
    wanted = key.lower()
    for k, value in data.items():
        if k.lower() == wanted:
            return _require_str(data, k, layer)
    raise MalformedEvent(f"{layer}.{key}")


@dataclass(frozen=True)
class SnsRecord:
    topic_arn: str
    message:   str

    @classmethod
    def from_envelope(cls, envelope: Dict[str, Any]) -> "SnsRecord":
        records = envelope.get("Records")
        if not isinstance(records, list) or not records:
            raise MalformedEvent("Records", "missing or empty")
        if len(records) > 1:
            log.warning("Envelope carries %d records; only the first is processed.", len(records))
        record = records[0]
        sns = record.get("Sns") if isinstance(record, dict) else None
        if not isinstance(sns, dict):
            raise MalformedEvent("Records[0].Sns", "missing or not an object")
        return cls(
            topic_arn=_require_str(sns, "TopicArn", "Sns"),
            message=_require_str(sns, "Message", "Sns"),
        )


@dataclass(frozen=True)
class LifecycleMessage:
    instance_id:  str
    transition:   str
    hook_name:    str
    group_name:   str
    metadata:     str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifecycleMessage":
        return cls(
            instance_id=_require_str(data, "EC2InstanceId", "message"),
            transition=_require_str(data, "LifecycleTransition", "message"),
            hook_name=_require_str(data, "LifecycleHookName", "message"),
            group_name=_require_str(data, "AutoScalingGroupName", "message"),
            metadata=_require_str(data, "NotificationMetadata", "message"),
        )


@dataclass(frozen=True)
class NotificationMetadata:
    cluster_name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationMetadata":
        return cls(cluster_name=_require_str_ci(data, CLUSTER_NAME_KEY, "metadata"))


def parse_event(payload: Union[str, bytes]) -> LifecycleEvent:
    """Decode a raw SNS-to-Lambda payload into a LifecycleEvent."""
    record = SnsRecord.from_envelope(_loads_object(payload, "envelope"))
    message = LifecycleMessage.from_dict(_loads_object(record.message, "Sns.Message"))
    metadata = NotificationMetadata.from_dict(
        _loads_object(message.metadata, "message.NotificationMetadata"))

    return LifecycleEvent(
        instance_id=message.instance_id,
        transition=message.transition,
        group_name=message.group_name,
        hook_name=message.hook_name,
        cluster_name=metadata.cluster_name,
        topic_arn=record.topic_arn,
        raw_message=record.message,
    )
