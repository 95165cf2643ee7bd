# quickchat/infra/assets.py

import logging

import requests

from quickchat.core.config import ASSET_UPLOAD_PRESET, ASSET_UPLOAD_TIMEOUT, ASSET_UPLOAD_URL
from quickchat.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def upload_image(data: str) -> str:
    """
    Upload an image (data URI or remote URL) to the asset store and return
    the hosted URL. Only that URL is ever persisted.
    """
    if not ASSET_UPLOAD_URL:
        raise UpstreamError("Image upload is not configured")

    try:
        resp = requests.post(
            ASSET_UPLOAD_URL,
            data={"file": data, "upload_preset": ASSET_UPLOAD_PRESET},
            timeout=ASSET_UPLOAD_TIMEOUT,
        )
        resp.raise_for_status()
        body = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("❌ Image upload failed: %s", e)
        raise UpstreamError(f"Image upload failed: {e}")

    url = body.get("secure_url") or body.get("url")
    if not url:
        raise UpstreamError("Image upload failed: no URL returned")
    return url
