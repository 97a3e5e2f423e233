"""3D print queue tracker: order store, query policy and HTTP API."""

__version__ = "1.0.0"
