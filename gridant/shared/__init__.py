"""
gridant/shared — data models shared by the engine and its callers.
"""

from gridant.shared.models import ColonyParams, RouteRequest, RouteResult

__all__ = ["ColonyParams", "RouteRequest", "RouteResult"]
