from .health import HealthView
from .ping import PingView

__all__ = ["PingView", "HealthView"]
