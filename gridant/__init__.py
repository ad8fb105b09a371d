"""
gridant — routing surface around the gridant_core colony.

Modules:
    gridant.shared.models  — ColonyParams, RouteRequest, RouteResult
    gridant.loader         — matrix file → biased weight matrix
    gridant.planner        — plan_route(), plan_route_from_file()
    gridant.cli            — `gridant` / `python -m gridant`

Nothing is re-exported here: gridant_core imports gridant.shared.models,
and an eager import of the planner would make the two packages circular.
"""
