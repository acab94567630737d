"""
Auth callback module.

Public API:
- AuthCallbackFlow: redirect-back state machine
- AuthStateWatcher: funnels SIGNED_IN events into the same flow
- FlowGuard: generation/liveness guard shared by both
- CallbackParams, CallbackOutcome, Navigation: models
"""

from .flow import AuthCallbackFlow
from .guard import FlowGuard, FlowTicket
from .models import (
    AUTH_FAILED_MESSAGE,
    CallbackOutcome,
    CallbackParams,
    CallbackState,
    FailureKind,
    Navigation,
)
from .navigation import INavigator, RecordingNavigator
from .watcher import AuthStateWatcher

__all__ = [
    "AuthCallbackFlow",
    "AuthStateWatcher",
    "FlowGuard",
    "FlowTicket",
    "AUTH_FAILED_MESSAGE",
    "CallbackOutcome",
    "CallbackParams",
    "CallbackState",
    "FailureKind",
    "Navigation",
    "INavigator",
    "RecordingNavigator",
]
