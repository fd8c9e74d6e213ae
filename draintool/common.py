import boto3
from botocore.config import Config
from .config import REGION

# The pipeline never retries on its own; only botocore's transport-level
# retries for throttling and connection errors apply.
_CLIENT_CONFIG = Config(retries={"mode": "standard"})


def _make_client(service: str, **kwargs):
    """Ensure region is always applied from config.py"""
    kwargs.setdefault("region_name", REGION)
    kwargs.setdefault("config", _CLIENT_CONFIG)
    return boto3.client(service, **kwargs)

def make_ecs_client(**kwargs):
    return _make_client("ecs", **kwargs)

def make_autoscaling_client(**kwargs):
    return _make_client("autoscaling", **kwargs)

def make_sns_client(**kwargs):
    return _make_client("sns", **kwargs)


def describe_client_error(exc: Exception) -> str:
    """Render a boto3 error as 'Code: Message' when the service returned one."""
    response = getattr(exc, "response", None)
    if isinstance(response, dict):
        error = response.get("Error", {})
        code = error.get("Code", "Unknown")
        message = error.get("Message", str(exc))
        return f"{code}: {message}"
    return str(exc)
