"""Job board API client.

The request pipeline is the only component that touches the network; the
auth, jobs, and applications modules reshape its raw payloads into the
normalized models callers depend on.
"""

from jobboard_api.client import JobBoardClient
from jobboard_api.errors import ApiError, handle_api_error
from jobboard_api.pipeline import MultipartPart, RequestDescriptor, RequestPipeline

__all__ = [
    "ApiError",
    "JobBoardClient",
    "MultipartPart",
    "RequestDescriptor",
    "RequestPipeline",
    "handle_api_error",
]
