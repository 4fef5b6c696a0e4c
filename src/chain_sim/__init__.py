from .simulator import ChainSimulator, DEFAULT_CONFIG

__all__ = ["ChainSimulator", "DEFAULT_CONFIG"]
