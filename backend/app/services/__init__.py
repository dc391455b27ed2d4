"""
Service layer shared by the routers.

This package contains the account registry lookups and the process-wide
risk scorer configuration.
"""

__all__ = ['accounts', 'risk']
