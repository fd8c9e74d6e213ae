"""
Exception hierarchy for the drain pipeline.

Every error is fatal for the current invocation. Recovery happens outside the
process: the next delivery of the lifecycle notification starts a fresh pass.
"""


class DrainToolError(Exception):
    """Base class for all pipeline failures."""


class MalformedEvent(DrainToolError):
    """The trigger payload is missing a field or has one of the wrong type."""

    def __init__(self, field: str, detail: str = "missing or not a string"):
        self.field = field
        self.detail = detail
        super().__init__(f"Malformed lifecycle event: {field} {detail}")


class NodeNotFound(DrainToolError):
    def __init__(self, cluster: str, instance_id: str):
        self.cluster = cluster
        self.instance_id = instance_id
        super().__init__(f"Container instance for {instance_id} does not exist in cluster {cluster}.")


class NodeLookupFailed(DrainToolError):
    pass


class DrainTransitionFailed(DrainToolError):
    pass


class WorkloadQueryFailed(DrainToolError):
    pass


class WorkloadStopFailed(DrainToolError):
    def __init__(self, task_arn: str, message: str):
        self.task_arn = task_arn
        super().__init__(message)


class ResubmissionFailed(DrainToolError):
    pass


class CompletionFailed(DrainToolError):
    pass
