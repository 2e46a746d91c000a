"""
Utility modules for the short drama gateway
"""
from .config_loader import GatewayConfig, ThemeDefaults, UpstreamConfig, load_gateway_config

__all__ = [
    'GatewayConfig',
    'ThemeDefaults',
    'UpstreamConfig',
    'load_gateway_config',
]
