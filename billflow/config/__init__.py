from .environment import settings, configure_logging

__all__ = ['settings', 'configure_logging']
