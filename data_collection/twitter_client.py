# data_collection/twitter_client.py

import logging
from typing import Optional

import requests

import config
from data_collection.credentials import Credentials
from data_collection.delimited import TSV_SEPARATOR, write_file
from data_collection.models import SearchResponse
from utils.exceptions import (
    MissingCredentialsError,
    NotAuthenticatedError,
    ResponseParseError,
    TokenParseError,
    TransportError,
)

log = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"


class TwitterClient:
    """
    HTTP client for the Twitter standard search API using application-only auth.

    Holds the encoded api key (via Credentials) and, once get_access_token()
    has succeeded, the bearer token that is attached to every search request.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: Optional[requests.Session] = None,
        token_url: str = config.TWITTER_TOKEN_URL,
        search_url: str = config.TWITTER_SEARCH_URL,
        result_type: Optional[str] = config.TWITTER_RESULT_TYPE,
        timeout: float = config.HTTP_TIMEOUT,
    ):
        self.credentials = credentials
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.token_url = token_url
        self.search_url = search_url
        self.result_type = result_type
        self.timeout = timeout
        self.token = ""

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def get_access_token(self) -> str:
        """
        Exchange the consumer credentials for a bearer token.

        Returns:
            str: the access token, also stored on the client

        Raises:
            MissingCredentialsError: consumer key or secret is empty
            TransportError: the token endpoint could not be reached
            TokenParseError: the body is not JSON or has no access_token
        """
        if not self.credentials.is_complete:
            raise MissingCredentialsError(
                "No API key set for twitter access. Set TWITTER_CONSUMER_KEY and TWITTER_SECRET."
            )

        headers = {
            "Authorization": f"Basic {self.credentials.api_key}",
            "Content-Type": FORM_CONTENT_TYPE,
        }
        log.info(f"Requesting application-only bearer token from {self.token_url}")
        try:
            response = self.session.post(
                self.token_url,
                headers=headers,
                data={"grant_type": "client_credentials"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Token request to {self.token_url} failed: {e}") from e

        log.info(f"Token endpoint responded {response.status_code}:{response.reason}")

        try:
            body = response.json()
        except ValueError as e:
            raise TokenParseError(
                f"Token endpoint returned a non-JSON body (status {response.status_code})"
            ) from e

        if not isinstance(body, dict):
            raise TokenParseError(f"Token endpoint returned {type(body).__name__}, expected an object")

        access_token = body.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise TokenParseError(
                f"Token endpoint response has no access_token (status {response.status_code})"
            )

        log.debug(f"Received token_type={body.get('token_type')!r}")
        self.token = access_token
        return self.token

    def search_tweets(self, query: str, count: int = config.TWITTER_SEARCH_COUNT) -> SearchResponse:
        """
        Search tweets matching `query`. A single page of at most `count` results.

        Raises:
            NotAuthenticatedError: get_access_token() has not succeeded yet
            TransportError: the search endpoint could not be reached
            ResponseParseError: the body is not JSON or has no statuses list
        """
        if not self.is_authenticated:
            raise NotAuthenticatedError("No bearer token: call get_access_token() before searching.")

        # GET: parameters go on the URL query string, never in the body.
        params = {"q": query, "count": str(count)}
        if self.result_type:
            params["result_type"] = self.result_type
        headers = {"Authorization": f"Bearer {self.token}"}

        log.info(f"Searching tweets for {query!r} (count={count})")
        try:
            response = self.session.get(
                self.search_url,
                headers=headers,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Search request to {self.search_url} failed: {e}") from e

        log.info(f"Search endpoint responded {response.status_code}:{response.reason}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseParseError(
                f"Search endpoint returned a non-JSON body (status {response.status_code})"
            ) from e

        result = SearchResponse.from_json(payload)
        log.info(f"Search returned {len(result)} tweets")
        return result

    def search_to_file(self, query: str, path: str, sep: str = TSV_SEPARATOR,
                       count: int = config.TWITTER_SEARCH_COUNT) -> SearchResponse:
        """Search and write the results to a delimited file at `path`."""
        result = self.search_tweets(query, count=count)
        write_file(result, path, sep)
        return result
