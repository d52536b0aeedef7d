"""
Services Package

Business logic layer implementing use cases and orchestrating between repositories
and external services.
"""

from .auth_service import AuthService, GoogleIdentityVerifier, IdentityVerifier
from .billing_service import BillingService
from .job_service import JobService
from .synthesizer import SampleSynthesizer, Synthesizer
from .user_service import UserService

__all__ = [
    'AuthService',
    'GoogleIdentityVerifier',
    'IdentityVerifier',
    'BillingService',
    'JobService',
    'SampleSynthesizer',
    'Synthesizer',
    'UserService',
]
