"""Routing Islands - Find parts of a road/waterway network a mode cannot reach.

Given a bounded extract of a network (vertices, edges, turn restrictions),
the detector reports for every transport mode the groups of edges that
cannot be reached from outside the extract, or from which the outside
cannot be reached, plus edges not connected to anything at all.

Modules:
    core: Mode hierarchy, implied access, oneway semantics, reachability growth
    model: Data structures (Vertex, Edge, Relation, NetworkSnapshot, Finding)
    validation: Detection pass orchestrator and its state machine

Example:
    from routing_islands.model import NetworkSnapshot
    from routing_islands.validation import RoutingIslandDetector

    findings = RoutingIslandDetector().detect(NetworkSnapshot.load_json("extract.json"))
"""
