"""
DI-specific error types.
"""

from typing import List, Optional


class DIError(Exception):
    """Base exception for DI errors."""
    pass


class ProviderNotFoundError(DIError):
    """Provider not found for requested token."""

    def __init__(
        self,
        token: str,
        tag: Optional[str] = None,
        candidates: Optional[List[str]] = None,
    ):
        self.token = token
        self.tag = tag
        self.candidates = candidates or []

        msg = f"No provider found for token={token}"
        if tag:
            msg += f" (tag={tag})"

        if self.candidates:
            msg += "\n\nCandidates found:"
            for candidate in self.candidates:
                msg += f"\n  - {candidate}"

        msg += "\n\nSuggested fixes:"
        msg += f"\n  - Register a provider for {token}"
        if token.endswith("RequestBag"):
            msg += "\n  - Call register_bag(container) during app setup"

        super().__init__(msg)
