"""
StorjClient - minimal S3-compatible client for the Storj gateway
"""

import logging
from datetime import datetime, timedelta, UTC
from email.utils import parsedate_to_datetime
from typing import Optional, Tuple
from urllib.parse import quote, urlparse

import httpx

from ._http import HttpClient
from ._signer import AwsSignatureV4Signer, MAX_PRESIGN_EXPIRY
from .config import StorageConfig
from .error import (
    AccessDeniedException,
    AuthenticationException,
    ObjectNotFoundException,
    ServerException,
)
from .models import ObjectContent, ObjectMetadata, ShareLink


class StorjClient:
    """
    S3-compatible client covering the calls storjsync needs: HEAD, GET and
    presigned GET URLs.

    Example:
        config = load_config("storj.json")
        async with StorjClient(config) as client:
            meta = await client.head_object("backups", "db/latest.sql.gz")
            link = await client.get_object_url("backups", "db/latest.sql.gz", 3600)
    """

    def __init__(
        self,
        config: StorageConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize StorjClient.

        Args:
            config: Connection settings; validated here so a broken
                configuration fails at construction time.
            transport: Optional httpx transport, mainly for tests.

        Raises:
            ConfigurationException: If the configuration is invalid.
        """
        self.config = config.validate()
        self.base_url = config.endpoint.rstrip("/")
        self.use_path_style = config.use_path_style_endpoint

        self._http = HttpClient(
            timeout=config.timeout,
            transport=transport,
        )
        self._signer = AwsSignatureV4Signer(
            config.credentials.key,
            config.credentials.secret,
            region=config.region,
        )
        self._logger = logging.getLogger(__name__)

    def _object_location(self, bucket_name: str, object_name: str) -> Tuple[str, str, str]:
        """Return (scheme, host, path) for an object, honouring path-style addressing."""
        parsed = urlparse(self.base_url)
        encoded_object = quote(object_name, safe="/~")
        base_path = parsed.path.rstrip("/")

        if self.use_path_style:
            return parsed.scheme, parsed.netloc, f"{base_path}/{bucket_name}/{encoded_object}"
        return parsed.scheme, f"{bucket_name}.{parsed.netloc}", f"{base_path}/{encoded_object}"

    def _validate_expiry(self, expires_in_seconds: int) -> None:
        if expires_in_seconds < 1 or expires_in_seconds > MAX_PRESIGN_EXPIRY:
            raise ValueError(
                f"Expiry must be between 1 second and {MAX_PRESIGN_EXPIRY} seconds (7 days)."
            )

    async def _make_request(self, method: str, bucket_name: str, object_name: str) -> httpx.Response:
        """Make a signed request against an object and map error statuses."""
        scheme, host, path = self._object_location(bucket_name, object_name)
        headers = self._signer.sign_request(method, host, path)
        url = f"{scheme}://{host}{path}"

        if method == "HEAD":
            response = await self._http.head(url, headers=headers)
        elif method == "GET":
            response = await self._http.get(url, headers=headers)
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")

        status = response.status_code
        if status == 404:
            raise ObjectNotFoundException(bucket_name, object_name)
        if status == 401:
            raise AuthenticationException("Gateway rejected the request credentials.")
        if status == 403:
            raise AccessDeniedException(f"Access denied to '{object_name}' in bucket '{bucket_name}'.")
        if status >= 400:
            raise ServerException(f"Request failed with status {status}", status)

        return response

    @staticmethod
    def _parse_last_modified(value: Optional[str]) -> datetime:
        """Parse an RFC 1123 Last-Modified header into an aware datetime."""
        if not value:
            raise ServerException("Response is missing a Last-Modified header.", 502)
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            raise ServerException(f"Unparseable Last-Modified header '{value}'.", 502)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    # Object operations

    async def head_object(self, bucket_name: str, object_name: str) -> ObjectMetadata:
        """Get object metadata without downloading."""
        response = await self._make_request("HEAD", bucket_name, object_name)

        return ObjectMetadata(
            bucket=bucket_name,
            key=object_name,
            last_modified=self._parse_last_modified(response.headers.get("Last-Modified")),
            size=int(response.headers.get("Content-Length", 0)),
            etag=response.headers.get("ETag", "").strip('"') or None,
            content_type=response.headers.get("Content-Type"),
        )

    async def get_object(self, bucket_name: str, object_name: str) -> ObjectContent:
        """Download an object into memory."""
        response = await self._make_request("GET", bucket_name, object_name)

        return ObjectContent(
            body=response.content,
            content_type=response.headers.get("Content-Type"),
            etag=response.headers.get("ETag", "").strip('"') or None,
        )

    async def presigned_get_object(
        self,
        bucket_name: str,
        object_name: str,
        expires_in_seconds: int = 600,
    ) -> ShareLink:
        """Generate a presigned GET URL using local SigV4 signing (no request is made)."""
        self._validate_expiry(expires_in_seconds)

        scheme, host, path = self._object_location(bucket_name, object_name)
        url = self._signer.generate_presigned_url(
            method="GET",
            host=host,
            path=path,
            expires_in_seconds=expires_in_seconds,
            use_https=(scheme.lower() == "https"),
        )

        self._logger.info(
            "[StorjSync][PresignedUrl] host=%s expirySeconds=%s bucket=%s object=%s",
            host,
            expires_in_seconds,
            bucket_name,
            object_name,
        )

        return ShareLink(
            url=url,
            expires_in_seconds=expires_in_seconds,
            expires_at=datetime.now(UTC) + timedelta(seconds=int(expires_in_seconds)),
        )

    async def get_object_url(self, bucket_name: str, object_name: str, expire_seconds: int = 600) -> str:
        """Return only the URL of a presigned GET."""
        link = await self.presigned_get_object(bucket_name, object_name, expire_seconds)
        return link.url

    async def close(self) -> None:
        """Close the client and cleanup resources."""
        await self._http.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def connect(config: StorageConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> StorjClient:
    """Build a client for the Storj gateway, failing fast on bad configuration."""
    return StorjClient(config, transport=transport)
