"""k1s0 featureflag PostHog provider library."""

from .backend import FeatureFlagBackend, InMemoryFeatureFlagBackend, PostHogBackend
from .bootstrap import create_client, create_provider, register_provider
from .coercion import parse_flag_value, parse_object_value
from .config import LogSection, PostHogSection, ProviderConfig, load
from .context import (
    DISTINCT_ID_CONTEXT_KEY,
    GROUPS_CONTEXT_KEY,
    PROPERTIES_CONTEXT_KEY,
    translate_payload,
)
from .exceptions import PostHogProviderError, PostHogProviderErrorCodes
from .logger import new_logger
from .models import FeatureFlagPayload, LookupResult, PostHogProperties
from .provider import PROVIDER_NAME, PostHogProvider

__all__ = [
    "DISTINCT_ID_CONTEXT_KEY",
    "FeatureFlagBackend",
    "FeatureFlagPayload",
    "GROUPS_CONTEXT_KEY",
    "InMemoryFeatureFlagBackend",
    "LogSection",
    "LookupResult",
    "PROPERTIES_CONTEXT_KEY",
    "PROVIDER_NAME",
    "PostHogBackend",
    "PostHogProperties",
    "PostHogProvider",
    "PostHogProviderError",
    "PostHogProviderErrorCodes",
    "PostHogSection",
    "ProviderConfig",
    "create_client",
    "create_provider",
    "load",
    "new_logger",
    "parse_flag_value",
    "parse_object_value",
    "register_provider",
    "translate_payload",
]
