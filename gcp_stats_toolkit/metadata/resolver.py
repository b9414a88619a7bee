"""
Placement resolvers.

A resolver answers "who and where am I" for the current process. On Google
Cloud the answers come from the metadata server; elsewhere they come from
environment variables. Pick the implementation once with select_resolver()
and pass it around; every call re-resolves from scratch.

Every lookup takes an optional timeout in seconds. The environment resolver
accepts and ignores it so callers can treat both implementations alike.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional

from ..config.constants import (
    ERROR_MESSAGES, INSTANCE_ATTRIBUTE_ENV_PREFIX, METADATA_PATHS, PROJECT_ATTRIBUTE_ENV_PREFIX,
    PROJECT_ENV_VARS, REGION_ENV_VAR, SERVICE_ACCOUNT_ENV_VAR, SERVICE_ACCOUNT_ID_TEMPLATE,
    ZONE_ENV_VAR
)
from ..config.settings import PipelineConfig, get_default_config
from ..utils.exceptions import InvalidFormatError, MetadataError, NotFoundError
from ..utils.logging import LoggerMixin
from .client import MetadataClient
from .zone import extract_region, extract_zone


@dataclass
class PlacementInfo:
    """Snapshot of every placement value, resolved in one pass"""
    project_id: str
    zone: str
    region: str
    service_account_email: str
    service_account_name: str
    service_account_id: str


class PlacementResolver(LoggerMixin, ABC):
    """Common interface for metadata-backed and environment-backed resolvers"""
    
    @abstractmethod
    def is_managed_environment(self) -> bool:
        ...
    
    @abstractmethod
    def project_id(self, timeout: Optional[float] = None) -> str:
        ...
    
    @abstractmethod
    def service_account_email(self, timeout: Optional[float] = None) -> str:
        ...
    
    @abstractmethod
    def region(self, timeout: Optional[float] = None) -> str:
        ...
    
    @abstractmethod
    def zone(self, timeout: Optional[float] = None) -> str:
        ...
    
    @abstractmethod
    def get_instance_attribute(self, key: str, timeout: Optional[float] = None) -> str:
        ...
    
    @abstractmethod
    def get_project_attribute(self, key: str, timeout: Optional[float] = None) -> str:
        ...
    
    def service_account_name(self, timeout: Optional[float] = None) -> str:
        """
        Get the part of the service account email before the @
        
        Raises:
            InvalidFormatError: If the email does not contain exactly one @
        """
        email = self.service_account_email(timeout)
        parts = email.split('@')
        if len(parts) != 2:
            raise InvalidFormatError(
                ERROR_MESSAGES['invalid_service_account'].format(email=email),
                details={'email': email}
            )
        return parts[0]
    
    def service_account_id(self, timeout: Optional[float] = None) -> str:
        """Get projects/{project}/serviceAccounts/{email}"""
        email = self.service_account_email(timeout)
        project = self.project_id(timeout)
        return SERVICE_ACCOUNT_ID_TEMPLATE.format(project=project, email=email)
    
    def placement(self, timeout: Optional[float] = None) -> PlacementInfo:
        """Resolve every placement value, applying timeout to each lookup"""
        return PlacementInfo(
            project_id=self.project_id(timeout),
            zone=self.zone(timeout),
            region=self.region(timeout),
            service_account_email=self.service_account_email(timeout),
            service_account_name=self.service_account_name(timeout),
            service_account_id=self.service_account_id(timeout)
        )
    
    def close(self) -> None:
        """Release any connection held by the resolver"""


class GceResolver(PlacementResolver):
    """Resolver backed by the metadata server"""
    
    def __init__(self, metadata_client: MetadataClient):
        super().__init__()
        self.metadata = metadata_client
    
    def is_managed_environment(self) -> bool:
        return True
    
    def close(self) -> None:
        self.metadata.close()
    
    def project_id(self, timeout: Optional[float] = None) -> str:
        try:
            project = self.metadata.get(METADATA_PATHS['project_id'], timeout).strip()
        except MetadataError as e:
            raise MetadataError(
                f"failed get project id from metadata server: {e}",
                details=e.details
            ) from e
        if not project:
            raise NotFoundError(ERROR_MESSAGES['project_metadata_empty'])
        return project
    
    def service_account_email(self, timeout: Optional[float] = None) -> str:
        return self._get(METADATA_PATHS['service_account_email'], 'ServiceAccountEmail', timeout).strip()
    
    def region(self, timeout: Optional[float] = None) -> str:
        return extract_region(self._zone_path(timeout))
    
    def zone(self, timeout: Optional[float] = None) -> str:
        return extract_zone(self._zone_path(timeout))
    
    def get_instance_attribute(self, key: str, timeout: Optional[float] = None) -> str:
        return self.metadata.get(METADATA_PATHS['instance_attribute'].format(key=key), timeout)
    
    def get_project_attribute(self, key: str, timeout: Optional[float] = None) -> str:
        return self.metadata.get(METADATA_PATHS['project_attribute'].format(key=key), timeout)
    
    def _zone_path(self, timeout: Optional[float]) -> str:
        return self._get(METADATA_PATHS['zone'], 'Zone', timeout).strip()
    
    def _get(self, path: str, what: str, timeout: Optional[float]) -> str:
        try:
            return self.metadata.get(path, timeout)
        except MetadataError as e:
            raise MetadataError(f"failed get {what}: {e}", details=e.details) from e


class EnvironmentResolver(PlacementResolver):
    """Resolver backed by environment variables, used off Google Cloud"""
    
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        super().__init__()
        self.environ = os.environ if environ is None else environ
    
    def is_managed_environment(self) -> bool:
        return False
    
    def project_id(self, timeout: Optional[float] = None) -> str:
        for env_var in PROJECT_ENV_VARS:
            project = self.environ.get(env_var, '')
            if project:
                return project
        raise NotFoundError(
            ERROR_MESSAGES['project_env_not_found'],
            details={'env_vars': list(PROJECT_ENV_VARS)}
        )
    
    def service_account_email(self, timeout: Optional[float] = None) -> str:
        return self.environ.get(SERVICE_ACCOUNT_ENV_VAR, '')
    
    def region(self, timeout: Optional[float] = None) -> str:
        return self.environ.get(REGION_ENV_VAR, '')
    
    def zone(self, timeout: Optional[float] = None) -> str:
        return self.environ.get(ZONE_ENV_VAR, '')
    
    def get_instance_attribute(self, key: str, timeout: Optional[float] = None) -> str:
        return self.environ.get(f"{INSTANCE_ATTRIBUTE_ENV_PREFIX}{key}", '')
    
    def get_project_attribute(self, key: str, timeout: Optional[float] = None) -> str:
        return self.environ.get(f"{PROJECT_ATTRIBUTE_ENV_PREFIX}{key}", '')


def select_resolver(config: Optional[PipelineConfig] = None,
                    metadata_client: Optional[MetadataClient] = None,
                    environ: Optional[Mapping[str, str]] = None) -> PlacementResolver:
    """
    Probe the metadata server once and return the matching resolver
    
    Args:
        config: Pipeline configuration supplying metadata deadlines
        metadata_client: Client to probe and query (built from config if None)
        environ: Environment mapping for the off-platform resolver
        
    Returns:
        GceResolver on Google Cloud, EnvironmentResolver elsewhere. A client
        built here is closed when the environment resolver is chosen; a
        caller-supplied client is left open.
    """
    config = config or get_default_config()
    client = metadata_client or MetadataClient(timeout=config.metadata_timeout, environ=environ)
    if client.on_gce(timeout=config.metadata_probe_timeout):
        return GceResolver(client)
    if metadata_client is None:
        client.close()
    return EnvironmentResolver(environ)
