from app.client.api import Page, StorefrontClient
from app.client.errors import AuthorizationFailed, ClientError, RequestFailed, ValidationFailed
from app.client.guard import Decision, NavigationGuard, Route
from app.client.state import AuthState, Cart, ClientState
