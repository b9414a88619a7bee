"""Configuration settings for the GCP stats toolkit"""

import os
from dataclasses import dataclass, fields
from typing import Dict, Any, Mapping, Optional
from .constants import DEFAULT_VALUES, CONFIG_ENV_VARS


@dataclass
class PipelineConfig:
    """Main pipeline configuration"""
    
    # Logging settings
    log_level: str = DEFAULT_VALUES['log_level']
    log_format: str = DEFAULT_VALUES['log_format']
    
    # Deadlines, in seconds, applied to each network call
    metadata_timeout: float = DEFAULT_VALUES['metadata_timeout']
    metadata_probe_timeout: float = DEFAULT_VALUES['metadata_probe_timeout']
    query_timeout: float = DEFAULT_VALUES['query_timeout']
    insert_timeout: float = DEFAULT_VALUES['insert_timeout']
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'PipelineConfig':
        """Create configuration from dictionary"""
        return cls(**config_dict)
    
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'PipelineConfig':
        """
        Create configuration from defaults overridden by STATS_COPY_* variables
        
        Args:
            environ: Environment mapping (uses os.environ if None)
            
        Returns:
            PipelineConfig instance
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for name, env_var in CONFIG_ENV_VARS.items():
            value = environ.get(env_var)
            if not value:
                continue
            overrides[name] = value if name == 'log_level' else float(value)
        return cls(**overrides)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def get_default_config() -> PipelineConfig:
    """Get default pipeline configuration"""
    return PipelineConfig()
