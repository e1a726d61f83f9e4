"""Decoders for the two response envelopes cPanel returns.

API2 calls (``/json-api/cpanel``) wrap everything in ``cpanelresult`` with the
success flag at ``cpanelresult.event.result`` and per-item details in
``cpanelresult.data``. UAPI calls (``/execute/...``) carry a flat top-level
``status`` flag with ``errors`` and ``messages`` lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

EXISTS_MARKER = "exists"


def is_success_flag(value: Any) -> bool:
    """Return True for the provider's success sentinel (1, "1" or True)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip() == "1"
    return False


def _is_failure_flag(value: Any) -> bool:
    return value is not None and not is_success_flag(value)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class Outcome:
    """Verdict of a decoder: success flag plus the reason on failure."""

    success: bool
    reason: str | None = None
    already_existed: bool = False


@dataclass(frozen=True)
class Api2Envelope:
    """The ``cpanelresult`` envelope of an API2 call."""

    event_result: Any
    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def parse(cls, payload: Any) -> Api2Envelope:
        """Extract the envelope, tolerating missing or malformed pieces."""
        result = payload.get("cpanelresult") if isinstance(payload, dict) else None
        if not isinstance(result, dict):
            return cls(event_result=None)
        event = result.get("event")
        event_result = event.get("result") if isinstance(event, dict) else None
        data = [item for item in _as_list(result.get("data")) if isinstance(item, dict)]
        error = result.get("error")
        return cls(
            event_result=event_result,
            data=data,
            error=str(error) if error else None,
        )

    @property
    def reasons(self) -> list[str]:
        """Failure text from the envelope and its per-item entries."""
        texts: list[str] = []
        for item in self.data:
            for key in ("reason", "err"):
                text = item.get(key)
                if text:
                    texts.append(str(text))
        if self.error:
            texts.append(self.error)
        return texts

    @property
    def failed_items(self) -> list[dict[str, Any]]:
        return [item for item in self.data if _is_failure_flag(item.get("result"))]


@dataclass(frozen=True)
class UapiEnvelope:
    """The flat envelope of a UAPI call."""

    status: Any
    errors: list[str] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, payload: Any) -> UapiEnvelope:
        if not isinstance(payload, dict):
            return cls(status=None)
        return cls(
            status=payload.get("status"),
            errors=[str(e) for e in _as_list(payload.get("errors"))],
            messages=[str(m) for m in _as_list(payload.get("messages"))],
        )


def decode_mkdir(payload: Any) -> Outcome:
    """Classify a ``Fileman::mkdir`` response.

    An explicit success wins. Failing that, a reason mentioning that the
    target already exists counts as success so directory creation stays
    idempotent.
    """
    envelope = Api2Envelope.parse(payload)
    if is_success_flag(envelope.event_result):
        return Outcome(success=True)
    reasons = envelope.reasons
    if any(EXISTS_MARKER in reason for reason in reasons):
        return Outcome(success=True, already_existed=True)
    return Outcome(success=False, reason="; ".join(reasons) or "Directory creation failed")


def decode_upload(payload: Any) -> Outcome:
    """Classify a ``Fileman/upload_files`` response.

    The failure reason is taken from ``errors``, falling back to ``messages``
    when cPanel reports the refusal there instead.
    """
    envelope = UapiEnvelope.parse(payload)
    if is_success_flag(envelope.status):
        return Outcome(success=True)
    texts = envelope.errors or envelope.messages
    return Outcome(success=False, reason="; ".join(texts) or "File upload failed")


def decode_fileop(payload: Any, *, require_event_result: bool = True) -> Outcome:
    """Classify a ``Fileman::fileop`` response.

    Args:
        payload: Decoded JSON body
        require_event_result: When False, a missing success flag is accepted
            as long as nothing reports failure. Used for rmdir, where cPanel
            answers with an empty result.

    Returns:
        Outcome carrying the first per-path error text verbatim on failure
    """
    envelope = Api2Envelope.parse(payload)
    failed = envelope.failed_items
    if failed:
        item = failed[0]
        reason = item.get("err") or item.get("reason") or envelope.error
        return Outcome(success=False, reason=str(reason) if reason else "File operation failed")

    if is_success_flag(envelope.event_result):
        return Outcome(success=True)
    if envelope.error or _is_failure_flag(envelope.event_result):
        return Outcome(success=False, reason="; ".join(envelope.reasons) or "File operation failed")
    if not require_event_result and isinstance(payload, dict) and "cpanelresult" in payload:
        return Outcome(success=True)
    return Outcome(success=False, reason="; ".join(envelope.reasons) or "File operation failed")
