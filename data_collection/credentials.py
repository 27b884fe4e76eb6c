# data_collection/credentials.py

import base64
from dataclasses import dataclass, field
from urllib.parse import quote_plus

import config


def url_encode(value: str) -> str:
    """
    Percent-encode a single value using form-urlencoding rules.

    Spaces become '+', and everything except letters, digits and '_.-~'
    is escaped.
    """
    return quote_plus(value, safe='')


def encode_api_key(consumer_key: str, consumer_secret: str) -> str:
    """
    Build the Basic-Auth key for application-only authentication.

    Args:
        consumer_key (str): Twitter application consumer key
        consumer_secret (str): Twitter application consumer secret

    Returns:
        str: base64(urlencode(key) + ":" + urlencode(secret))
    """
    joined = f"{url_encode(consumer_key)}:{url_encode(consumer_secret)}"
    return base64.b64encode(joined.encode('utf-8')).decode('ascii')


@dataclass(frozen=True)
class Credentials:
    """Consumer key and secret for one application, with the derived api key."""

    consumer_key: str
    consumer_secret: str = field(repr=False)
    api_key: str = field(init=False, repr=False)

    def __post_init__(self):
        # Frozen dataclass: the api key is set once here and never again.
        object.__setattr__(self, 'api_key', encode_api_key(self.consumer_key, self.consumer_secret))

    @property
    def is_complete(self) -> bool:
        return bool(self.consumer_key) and bool(self.consumer_secret)

    @classmethod
    def from_env(cls) -> 'Credentials':
        """Build credentials from TWITTER_CONSUMER_KEY / TWITTER_SECRET as loaded by config."""
        return cls(config.TWITTER_CONSUMER_KEY, config.TWITTER_SECRET)
