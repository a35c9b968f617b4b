# domain/model/qr.py

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class QrFormat(str, Enum):
    """Output formats for a rendered QR code."""
    PNG = 'png'
    SVG = 'svg'

    @property
    def mime_type(self) -> str:
        return 'image/png' if self is QrFormat.PNG else 'image/svg+xml'


# ── Payloads ─────────────────────────────────────────────


@dataclass(frozen=True)
class PublicQrPayload:
    """Profile card shared through the public lookup-by-id path."""
    name: str
    email: str
    membership: str

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'email': self.email,
            'membership': self.membership,
        }

    def serialize(self) -> str:
        return _compact_json(self.to_dict())


@dataclass(frozen=True)
class SelfQrPayload:
    """Profile card an authenticated user generates for themselves."""
    user_id: str
    name: str
    email: str
    membership: str
    profile_url: str
    generated_at: datetime

    def to_dict(self) -> dict:
        return {
            'userId': self.user_id,
            'name': self.name,
            'email': self.email,
            'membership': self.membership,
            'profileUrl': self.profile_url,
            'generatedAt': _iso_millis(self.generated_at),
        }

    def serialize(self) -> str:
        return _compact_json(self.to_dict())


QrPayload = PublicQrPayload | SelfQrPayload


def _compact_json(data: dict) -> str:
    # Key order is the dict's insertion order, so equal payloads serialize identically
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False)


def _iso_millis(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
