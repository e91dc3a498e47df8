"""Configuration for the macOS metrics exporter"""
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseSettings):
    """Environment-driven settings with pydantic validation"""

    # Server settings
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")
    metrics_port: int = Field(default=9127, ge=1, le=65535, description="Metrics server port")

    # Collection settings
    enabled_collectors_str: str = Field(
        default="powermetrics,vmstat",
        description="Enabled collectors (comma-separated)"
    )
    powermetrics_timeout: float = Field(default=10.0, ge=2.0, description="powermetrics timeout in seconds")
    vmstat_timeout: float = Field(default=5.0, ge=1.0, description="vm_stat timeout in seconds")
    macmon_timeout: float = Field(default=10.0, ge=2.0, description="macmon timeout in seconds")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file")

    # Service settings
    service_name: str = Field(default="macos-metrics-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    class Config:
        env_prefix = ""
        case_sensitive = False

    @validator('log_level')
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def enabled_collectors(self) -> List[str]:
        """Get enabled collectors as a list"""
        return [item.strip() for item in self.enabled_collectors_str.split(',') if item.strip()]

    @enabled_collectors.setter
    def enabled_collectors(self, value: List[str]):
        """Set enabled collectors from a list"""
        self.enabled_collectors_str = ','.join(value)

    def is_collector_enabled(self, collector_name: str) -> bool:
        """Check if a specific collector is enabled"""
        return collector_name in self.enabled_collectors

    def timeout_for(self, source_id: str) -> float:
        """Capture timeout for a source, in seconds"""
        return self.source_timeouts().get(source_id, 10.0)

    def source_timeouts(self) -> Dict[str, float]:
        return {
            "powermetrics": self.powermetrics_timeout,
            "vmstat": self.vmstat_timeout,
            "macmon": self.macmon_timeout,
        }
