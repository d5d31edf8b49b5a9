# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Error taxonomy for Linear API access and identifier resolution.

Every failure raised by a transport or by the resolver is a
``LinearError``. Tool handlers catch the base class at their boundary and
hand ``str(exc)`` back to the caller, so each message is written to be
read by a person (or an LLM) without further context.

Classes:
  LinearError        -- base class
  TransportError     -- network failure before a response arrived
  HttpStatusError    -- non-2xx HTTP status
  GraphQLError       -- one or more errors reported by the GraphQL server
  NoDataError        -- response carried no ``data`` payload
  NotFoundError      -- resolution found no matching record
  AmbiguousError     -- resolution found several records, none preferred
  InvalidInputError  -- caller input cannot produce a request
  AuthError          -- no credentials available
"""

from __future__ import annotations

from collections.abc import Sequence


class LinearError(Exception):
    """Base class for every error surfaced to a tool handler."""


# --- Transport ---


class TransportError(LinearError):
    """The request never produced an HTTP response."""


class HttpStatusError(LinearError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body}")


class GraphQLError(LinearError):
    """The GraphQL layer reported errors.

    All reported messages are kept; the rendered message joins them with
    ``"; "``.
    """

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = list(messages) or ["GraphQL error"]
        super().__init__("; ".join(self.messages))


class NoDataError(LinearError):
    """HTTP and GraphQL both succeeded but ``data`` was missing."""

    def __init__(self) -> None:
        super().__init__("No data in response")


# --- Resolution ---


class NotFoundError(LinearError):
    """No remote record matched a human-supplied identifier.

    ``subject`` is the full description of what was searched for, e.g.
    ``Workflow state 'Done' not found for team 'ENG'``.
    """

    def __init__(self, subject: str) -> None:
        self.subject = subject
        super().__init__(subject)


class AmbiguousError(LinearError):
    """Several remote records matched and none is preferred.

    Carries every candidate name so the caller can retry with a precise
    one without another lookup.
    """

    def __init__(self, subject: str, candidates: Sequence[str]) -> None:
        self.subject = subject
        self.candidates = list(candidates)
        super().__init__(f"{subject}. Matches: {', '.join(self.candidates)}")


# --- Caller input ---


class InvalidInputError(LinearError):
    """Caller input cannot be turned into a request (e.g. nothing to update)."""


class AuthError(LinearError):
    """No API key or OAuth connection is available."""

    def __init__(self) -> None:
        super().__init__(
            "LINEAR_API_KEY not set. Set it as an environment variable or store "
            "it in the macOS Keychain as 'linear-api-key'."
        )
