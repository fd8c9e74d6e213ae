from typing import Any, Callable, Iterator, List, Sequence

def paginated(api_fn: Callable[..., Any], result_key: str, **kwargs) -> Iterator[Any]:
    """Generic boto3 nextToken pagination helper."""
    while True:
        resp = api_fn(**kwargs)
        yield from resp.get(result_key, [])
        token = resp.get("nextToken")
        if not token:
            break
        kwargs["nextToken"] = token

def chunked(items: Sequence[Any], size: int) -> Iterator[List[Any]]:
    """Split items into lists of at most `size` elements."""
    for start in range(0, len(items), size):
        yield list(items[start:start + size])
