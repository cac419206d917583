"""Failure types raised by external collaborators."""

from __future__ import annotations


class RemoteFailure(RuntimeError):
    """An external listing, fetch, analysis, or rewrite call failed.

    Never retried by the core; the session turns it into an error notice.
    """
