"""
AWS Signature V4 signer for storjsync
"""

import hashlib
import hmac
from datetime import datetime, UTC
from typing import Dict, Optional
from urllib.parse import quote

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
MAX_PRESIGN_EXPIRY = 604800


class AwsSignatureV4Signer:
    """
    Signs S3 requests using AWS Signature Version 4.

    Used both for Authorization headers on HEAD/GET requests and for
    presigned share URLs.
    """

    def __init__(self, access_key: str, secret_key: str, region: str = "us-east-1"):
        self.access_key = access_key
        self.secret_key = secret_key
        self.region = region

    def _credential_scope(self, datestamp: str) -> str:
        return f"{datestamp}/{self.region}/{SERVICE}/aws4_request"

    def sign_request(
        self,
        method: str,
        host: str,
        path: str,
        query_params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
        timestamp: Optional[datetime] = None,
    ) -> Dict[str, str]:
        """
        Sign a request and return the headers to send with it.

        The returned mapping contains the caller's headers plus ``host``,
        ``x-amz-date``, ``x-amz-content-sha256`` and ``Authorization``.
        """
        if timestamp is None:
            timestamp = datetime.now(UTC)

        amz_date = timestamp.strftime("%Y%m%dT%H%M%SZ")
        datestamp = timestamp.strftime("%Y%m%d")
        payload_hash = self._hash_payload(body)

        signed = dict(headers or {})
        signed["host"] = host
        signed["x-amz-date"] = amz_date
        signed["x-amz-content-sha256"] = payload_hash

        canonical_headers = self._build_canonical_headers(signed)
        canonical_headers_str = "".join(
            f"{k}:{v}\n" for k, v in sorted(canonical_headers.items())
        )
        signed_headers = ";".join(sorted(canonical_headers.keys()))

        canonical_request = "\n".join([
            method,
            path,
            self._build_canonical_querystring(query_params or {}),
            canonical_headers_str,
            signed_headers,
            payload_hash,
        ])

        credential_scope = self._credential_scope(datestamp)
        signature = self._signature(datestamp, amz_date, credential_scope, canonical_request)

        signed["Authorization"] = (
            f"{ALGORITHM} Credential={self.access_key}/{credential_scope}, "
            f"SignedHeaders={signed_headers}, Signature={signature}"
        )
        return signed

    def generate_presigned_url(
        self,
        method: str,
        host: str,
        path: str,
        expires_in_seconds: int = 600,
        query_params: Optional[Dict[str, str]] = None,
        use_https: bool = True,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """
        Generate a presigned URL with AWS Signature V4.
        """
        if expires_in_seconds < 1 or expires_in_seconds > MAX_PRESIGN_EXPIRY:
            raise ValueError(
                f"Expiry must be between 1 second and {MAX_PRESIGN_EXPIRY} seconds (7 days)."
            )

        if timestamp is None:
            timestamp = datetime.now(UTC)

        amz_date = timestamp.strftime("%Y%m%dT%H%M%SZ")
        datestamp = timestamp.strftime("%Y%m%d")
        credential_scope = self._credential_scope(datestamp)

        presigned_params = {
            "X-Amz-Algorithm": ALGORITHM,
            "X-Amz-Credential": f"{self.access_key}/{credential_scope}",
            "X-Amz-Date": amz_date,
            "X-Amz-Expires": str(expires_in_seconds),
            "X-Amz-SignedHeaders": "host",
        }
        if query_params:
            presigned_params.update(query_params)

        canonical_querystring = self._build_canonical_querystring(presigned_params)

        # Presigned GETs carry no body, so the payload is declared unsigned.
        canonical_request = "\n".join([
            method,
            path,
            canonical_querystring,
            f"host:{host}\n",
            "host",
            "UNSIGNED-PAYLOAD",
        ])

        presigned_params["X-Amz-Signature"] = self._signature(
            datestamp, amz_date, credential_scope, canonical_request
        )

        scheme = "https" if use_https else "http"
        query_string = self._build_canonical_querystring(presigned_params)
        return f"{scheme}://{host}{path}?{query_string}"

    def _signature(self, datestamp: str, amz_date: str, credential_scope: str, canonical_request: str) -> str:
        string_to_sign = "\n".join([
            ALGORITHM,
            amz_date,
            credential_scope,
            hashlib.sha256(canonical_request.encode()).hexdigest(),
        ])
        return hmac.new(
            self._derive_signing_key(datestamp),
            string_to_sign.encode(),
            hashlib.sha256
        ).hexdigest()

    def _build_canonical_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        canonical = {}
        for key, value in headers.items():
            canonical[key.lower()] = " ".join(str(value).split())
        return canonical

    def _build_canonical_querystring(self, params: Dict[str, str]) -> str:
        if not params:
            return ""
        return "&".join(
            f"{quote(k, safe='-_.~')}={quote(str(v), safe='-_.~')}"
            for k, v in sorted(params.items())
        )

    def _hash_payload(self, body: Optional[bytes]) -> str:
        return hashlib.sha256(body or b"").hexdigest()

    def _derive_signing_key(self, datestamp: str) -> bytes:
        k_date = hmac.new(
            f"AWS4{self.secret_key}".encode(),
            datestamp.encode(),
            hashlib.sha256
        ).digest()

        k_region = hmac.new(k_date, self.region.encode(), hashlib.sha256).digest()
        k_service = hmac.new(k_region, SERVICE.encode(), hashlib.sha256).digest()
        return hmac.new(k_service, b"aws4_request", hashlib.sha256).digest()
