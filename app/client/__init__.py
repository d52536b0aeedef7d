"""
Python client for the Voice Studio API
"""

from .api_client import VoiceStudioClient, error_for_response
from .poller import JobPoller, JobStatusView
from .session_store import SessionStore, StoredSession

__all__ = [
    "VoiceStudioClient",
    "error_for_response",
    "JobPoller",
    "JobStatusView",
    "SessionStore",
    "StoredSession",
]
