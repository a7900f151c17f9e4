"""
Authentication module for the session client.
Holds the data model, the session repository and the screen controllers.
"""

from .controllers import LoginController, RegisterController, ScreenController
from .models import (
    AuthenticatedSession,
    AuthOutcome,
    Credentials,
    Envelope,
    Failed,
    Ok,
    RegistrationRequest,
    StoredSessionRecord,
    UserProfile,
)
from .repository import SessionRepository
from .state import Error, Idle, Loading, ObservableValue, ScreenState, Success

__all__ = [
    'AuthenticatedSession', 'AuthOutcome', 'Credentials', 'Envelope', 'Failed', 'Ok',
    'RegistrationRequest', 'StoredSessionRecord', 'UserProfile',
    'SessionRepository',
    'ScreenController', 'LoginController', 'RegisterController',
    'ObservableValue', 'ScreenState', 'Idle', 'Loading', 'Success', 'Error',
]
