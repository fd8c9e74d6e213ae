import logging
from botocore.exceptions import BotoCoreError, ClientError
from ..aws_utils import list_container_instance_arns, describe_container_instances
from ..common import describe_client_error
from ..errors import NodeLookupFailed, NodeNotFound
from ..models import NodeHandle

log = logging.getLogger(__name__)

def execute(cluster: str, instance_id: str) -> NodeHandle:
    """
    Find the container instance backing `instance_id` in `cluster`.
    Always re-reads the cluster; nothing is cached between invocations.
    """
    try:
        arns = list_container_instance_arns(cluster)
        nodes = describe_container_instances(cluster, arns) if arns else []
    except (ClientError, BotoCoreError) as exc:
        raise NodeLookupFailed(
            f"Listing container instances in {cluster} failed: {describe_client_error(exc)}") from exc

    log.debug("Cluster %s has %d container instance(s)", cluster, len(nodes))
    for node in nodes:
        if node.instance_id is not None and node.instance_id == instance_id:
            return node
    raise NodeNotFound(cluster, instance_id)
