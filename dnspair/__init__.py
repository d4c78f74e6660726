"""dnspair - keep forward and reverse DNS records in step."""

__version__ = "0.1.0"
