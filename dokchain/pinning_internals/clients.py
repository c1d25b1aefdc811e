# pinning_internals/clients.py
import logging
import os

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


class PinataClient:
    """
    Thin wrapper around Pinata's "upload public file" endpoint.
    Errors are not caught here: transport, auth and HTTP-status failures
    reach the caller as the httpx exception that was raised.
    """

    def __init__(self, *, jwt: str, gateway_url: str = "", uploads_url: str = None,
                 timeout: float = 60, transport: httpx.BaseTransport = None):
        self.jwt = jwt
        self.gateway_url = gateway_url
        self.uploads_url = uploads_url or "https://uploads.pinata.cloud/v3/files"
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls):
        return cls(
            jwt=settings.PINATA_JWT,
            gateway_url=settings.GATEWAY_URL,
            uploads_url=settings.PINATA_UPLOADS_URL,
            timeout=settings.PINATA_TIMEOUT,
        )

    def pin(self, local_path, original_name=None) -> dict:
        """
        Reads the whole file into memory and uploads it as a named blob to the
        public network. Returns the service's `data` object untouched
        (cid, id, size, mime_type, ...).
        """
        with open(local_path, "rb") as fh:
            content = fh.read()
        name = original_name or os.path.basename(local_path)

        headers = {"Authorization": f"Bearer {self.jwt}"}
        files = {"file": (name, content, "application/octet-stream")}
        data = {"network": "public", "name": name}

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.post(self.uploads_url, headers=headers, files=files, data=data)
            response.raise_for_status()
            payload = response.json()

        result = payload.get("data", payload) if isinstance(payload, dict) else payload
        cid = result.get("cid") if isinstance(result, dict) else None
        logger.info(f"Pinned '{name}' ({len(content)} bytes) as {cid} -> {self.gateway_link(cid)}")
        return result

    def gateway_link(self, cid):
        """Public gateway URL for a CID, or None when no gateway is configured."""
        if not cid or not self.gateway_url:
            return None
        domain = self.gateway_url.rstrip("/")
        if not domain.startswith(("http://", "https://")):
            domain = f"https://{domain}"
        return f"{domain}/ipfs/{cid}"


def upstream_error_details(exc):
    """
    Body of the upstream error response, when the exception carries one.
    JSON bodies are decoded, anything else is returned as text.
    """
    response = getattr(exc, "response", None)
    if not isinstance(response, httpx.Response):
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None
