from .carrier import BackResult, CarrierRegistry, NavigationCarrier, NavigationFrame, registry
from .routes import page_to_route, sidebar_key

__all__ = [
    "BackResult",
    "CarrierRegistry",
    "NavigationCarrier",
    "NavigationFrame",
    "registry",
    "page_to_route",
    "sidebar_key",
]
