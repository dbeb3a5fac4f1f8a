from .base import Base
from .network import NetworkRecord

__all__ = ["Base", "NetworkRecord"]
