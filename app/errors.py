# app/errors.py
from __future__ import annotations


class PlanServiceError(Exception):
    """Base class for failures surfaced by the plan API."""


class PlanUnavailable(PlanServiceError):
    """The stored plan document is missing or is not a JSON object."""


class RenderFailed(PlanServiceError):
    """The headless browser could not launch, load the page or print it."""


class LLMError(PlanServiceError):
    # short tag returned to the client as ``source``
    source = "error"


class MissingCredential(LLMError):
    source = "server_config"


class InvalidCredentialFormat(LLMError):
    source = "server_config"


class UnauthorizedCredential(LLMError):
    source = "invalid_api_key"


class ProviderError(LLMError):
    source = "error"
