"""
PicBy Request ID Utilities
Generate unique request IDs for tracing scans in the logs.
"""
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "scan") -> str:
    """
    Generate a unique request ID for tracking.

    Args:
        prefix: Operation tag placed in front of the timestamp

    Returns:
        Unique request ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"
