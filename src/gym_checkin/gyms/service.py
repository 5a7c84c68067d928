from __future__ import annotations

import io
import logging
import secrets
import string
from datetime import datetime
from typing import Optional

import qrcode

from ..common.datetime_utils import now_local
from ..core.constants import QR_TOKEN_PREFIX, QR_TOKEN_RANDOM_LENGTH
from ..core.enums import Capability
from ..users.access import AccessProvider, Caller
from .model import FacilityCredential
from .repository import CredentialRepository

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_qr_token(gym_id: int, now: datetime) -> str:
    """GYM_<gym id>_<epoch ms>_<9 random base36 chars>."""

    suffix = "".join(secrets.choice(_BASE36) for _ in range(QR_TOKEN_RANDOM_LENGTH))
    return f"{QR_TOKEN_PREFIX}_{int(gym_id)}_{int(now.timestamp() * 1000)}_{suffix}"


def render_qr_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class CredentialService:
    """Use case: show and rotate the gym's check-in QR code."""

    def __init__(self, credentials: CredentialRepository, access: AccessProvider):
        self._credentials = credentials
        self._access = access

    def current(self, caller: Caller) -> Optional[FacilityCredential]:
        gym_id = self._access.staff_gym(caller, Capability.VIEW_QR)
        return self._credentials.get_current(gym_id)

    def rotate(self, caller: Caller, *, now: Optional[datetime] = None) -> FacilityCredential:
        gym_id = self._access.staff_gym(caller, Capability.ROTATE_QR)
        now = now or now_local()
        credential = self._credentials.replace(
            gym_id=gym_id,
            qr_value=generate_qr_token(gym_id, now),
            created_at=now,
        )
        logger.info("gym %s QR credential rotated by user %s", gym_id, caller.user_id)
        return credential
