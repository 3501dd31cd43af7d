from .app import AdaptersProvider, GatewaysProvider, create_container

__all__ = ["AdaptersProvider", "GatewaysProvider", "create_container"]
