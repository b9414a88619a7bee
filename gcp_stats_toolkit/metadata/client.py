"""Metadata server client for the GCP stats toolkit"""

import os
from typing import Mapping, Optional

import httpx

from ..config.constants import (
    DEFAULT_VALUES, ERROR_MESSAGES, METADATA_HEADERS, METADATA_HOST,
    METADATA_HOST_ENV_VAR, METADATA_IP, METADATA_URL_TEMPLATE
)
from ..utils.exceptions import MetadataError
from ..utils.logging import LoggerMixin


class MetadataClient(LoggerMixin):
    """Thin HTTP client for the Compute Engine metadata server"""
    
    def __init__(self, http_client: Optional[httpx.Client] = None, host: Optional[str] = None,
                 timeout: float = DEFAULT_VALUES['metadata_timeout'],
                 environ: Optional[Mapping[str, str]] = None):
        super().__init__()
        self.environ = os.environ if environ is None else environ
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client()
        self.host = host or self.environ.get(METADATA_HOST_ENV_VAR) or METADATA_HOST
        self.timeout = timeout
    
    def close(self) -> None:
        """Close the HTTP client if this instance created it"""
        if self._owns_http:
            self.http.close()
    
    def __enter__(self) -> 'MetadataClient':
        return self
    
    def __exit__(self, *exc) -> None:
        self.close()
    
    def url(self, path: str) -> str:
        return METADATA_URL_TEMPLATE.format(host=self.host, path=path)
    
    def get(self, path: str, timeout: Optional[float] = None) -> str:
        """
        Fetch a metadata value
        
        Args:
            path: Path relative to computeMetadata/v1/, e.g. instance/zone
            timeout: Deadline in seconds (uses the client default if None)
            
        Returns:
            Response body as text
            
        Raises:
            MetadataError: On transport failure, timeout or non-200 status
        """
        timeout = self.timeout if timeout is None else timeout
        self.log_debug(f"Fetching metadata path: {path}")
        try:
            response = self.http.get(self.url(path), headers=METADATA_HEADERS, timeout=timeout)
        except httpx.TimeoutException as e:
            raise MetadataError(
                ERROR_MESSAGES['metadata_timeout'].format(path=path),
                details={'path': path}
            ) from e
        except httpx.HTTPError as e:
            raise MetadataError(
                ERROR_MESSAGES['metadata_request_failed'].format(path=path, error=str(e)),
                details={'path': path}
            ) from e
        
        if response.status_code != httpx.codes.OK:
            raise MetadataError(
                ERROR_MESSAGES['metadata_bad_status'].format(
                    status=response.status_code, body=response.text, path=path
                ),
                details={'path': path, 'status_code': response.status_code, 'body': response.text}
            )
        return response.text
    
    def on_gce(self, timeout: float = DEFAULT_VALUES['metadata_probe_timeout']) -> bool:
        """
        Report whether the metadata server is reachable
        
        A configured GCE_METADATA_HOST counts as being on Google Cloud without
        probing. Otherwise the well-known metadata IP must answer with the
        Metadata-Flavor: Google response header.
        """
        if self.environ.get(METADATA_HOST_ENV_VAR):
            return True
        try:
            response = self.http.get(f"http://{METADATA_IP}", headers=METADATA_HEADERS, timeout=timeout)
        except httpx.HTTPError as e:
            self.log_debug(f"Metadata server probe failed: {e}")
            return False
        return response.headers.get('Metadata-Flavor') == 'Google'


def on_gcp(metadata_client: Optional[MetadataClient] = None) -> bool:
    """Return True when running on Compute Engine, GKE, Cloud Run or App Engine"""
    if metadata_client is not None:
        return metadata_client.on_gce()
    with MetadataClient() as client:
        return client.on_gce()
