"""
SMS Routing

Gateway resolution from the template registry.
"""

from messaging_sms.routing.gateway_selector import GatewayRoute, GatewaySelector

__all__ = [
    "GatewayRoute",
    "GatewaySelector",
]
