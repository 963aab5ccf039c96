"""
TransportGraph — Transport Network Core-Path Analysis.

Builds an LLDP adjacency graph from a tabular NE inventory and answers
path questions against it: the shortest route from an NE to the core,
routes forced through a chosen neighbor, and the convergence point shared
by several NEs on their way to the core.

License: MIT
"""

__version__ = "0.1.0"
