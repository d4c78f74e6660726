"""DNS zone provider implementations."""

from dnspair.providers.dns.base import ZoneProvider
from dnspair.providers.dns.route53 import Route53Provider

__all__ = ["ZoneProvider", "Route53Provider"]
