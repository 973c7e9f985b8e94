"""Per-user OAuth flow state, held by the caller between requests."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from oauth1_client.exceptions import FlowStateError, OAuth1Error
from oauth1_client.models.auth import AuthorizedRequestToken, OAuthToken

if TYPE_CHECKING:
    from oauth1_client.auth.flow import FlowCoordinator

logger = logging.getLogger(__name__)


class FlowState(StrEnum):
    """Where a user is in the OAuth dance."""

    INIT = "init"
    REQUEST_TOKEN_FETCHED = "request_token_fetched"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    ACCESS_TOKEN_EXCHANGED = "access_token_exchanged"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (FlowState.ACCESS_TOKEN_EXCHANGED, FlowState.FAILED)


class FlowSession(BaseModel):
    """State machine for one user's connection flow.

    The coordinator stays stateless; this model carries the request token
    across the browser round trip and can be stored in a web session with
    ``model_dump_json()`` / ``model_validate_json()``.

    INIT -> REQUEST_TOKEN_FETCHED -> AWAITING_AUTHORIZATION -> ACCESS_TOKEN_EXCHANGED,
    with any provider or validation error moving the session to FAILED.
    """

    state: FlowState = FlowState.INIT
    callback_url: str | None = None
    request_token: OAuthToken | None = None
    access_token: OAuthToken | None = None
    error: str | None = Field(default=None, description="Message of the error that failed the flow")

    async def start(
        self,
        coordinator: FlowCoordinator,
        callback_url: str | None = None,
    ) -> OAuthToken:
        """Fetch the request token (INIT -> REQUEST_TOKEN_FETCHED)."""
        self._require(FlowState.INIT, action="start")

        try:
            token = await coordinator.fetch_new_request_token(callback_url)
        except OAuth1Error as e:
            self._fail(e)
            raise

        self.callback_url = callback_url
        self.request_token = token
        self.state = FlowState.REQUEST_TOKEN_FETCHED
        return token

    def authorization_url(self, coordinator: FlowCoordinator, *, authenticate: bool = False) -> str:
        """URL to send the user to (-> AWAITING_AUTHORIZATION).

        May be called again while awaiting authorization, e.g. to re-render
        the redirect.
        """
        self._require(
            FlowState.REQUEST_TOKEN_FETCHED,
            FlowState.AWAITING_AUTHORIZATION,
            action="build the authorization URL",
        )
        request_token = self._held_request_token()

        build = coordinator.build_authenticate_url if authenticate else coordinator.build_authorize_url
        try:
            url = build(request_token.value, self.callback_url)
        except OAuth1Error as e:
            self._fail(e)
            raise

        self.state = FlowState.AWAITING_AUTHORIZATION
        return url

    async def complete(
        self,
        coordinator: FlowCoordinator,
        verifier: str | None = None,
    ) -> OAuthToken:
        """Exchange the authorized request token (-> ACCESS_TOKEN_EXCHANGED)."""
        self._require(FlowState.AWAITING_AUTHORIZATION, action="exchange the request token")
        authorized = AuthorizedRequestToken.from_token(self._held_request_token(), verifier)
        try:
            token = await coordinator.exchange_for_access_token(authorized)
        except OAuth1Error as e:
            self._fail(e)
            raise

        # Request tokens are single-use
        self.request_token = None
        self.access_token = token
        self.state = FlowState.ACCESS_TOKEN_EXCHANGED
        return token

    def _require(self, *states: FlowState, action: str) -> None:
        if self.state not in states:
            raise FlowStateError(f"Cannot {action} in state {self.state}", state=self.state)

    def _held_request_token(self) -> OAuthToken:
        if self.request_token is None:
            raise FlowStateError(f"No request token held in state {self.state}", state=self.state)
        return self.request_token

    def _fail(self, error: OAuth1Error) -> None:
        logger.warning("OAuth flow failed in state %s: %s", self.state, error.message)
        self.state = FlowState.FAILED
        self.error = error.message
