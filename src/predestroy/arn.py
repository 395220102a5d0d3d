"""Helpers for ARN-like identifiers."""

from __future__ import annotations


def arn_to_name(arn: str) -> str:
    """Return the part of ``arn`` after its last ``/``.

    ``arn:aws:ecs:us-east-1:123:service/my-cluster/web`` becomes ``web``.
    Strings without a ``/`` come back unchanged; nothing is validated.
    """
    return arn.rsplit("/", 1)[-1]
