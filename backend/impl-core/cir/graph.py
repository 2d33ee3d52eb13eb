import networkx as nx # type: ignore
from typing import Any, Dict, List

from cir.model import TypeDescriptor


class TypeGraph:
    """
    Typed multi-graph over loaded type descriptors.
    Nodes: canonical type names (payload = TypeDescriptor)
    Edges: INHERITS (class -> superclass), IMPLEMENTS (type -> interface)
    """
    def __init__(self) -> None:
        self.g = nx.MultiDiGraph()

    def add_type(self, t: TypeDescriptor) -> None:
        self.g.add_node(t.canonical_name, kind=t.kind, payload=t)

    def add_edge(self, src: str, dst: str, etype: str) -> None:
        self.g.add_edge(src, dst, etype=etype)

    def link(self, t: TypeDescriptor) -> None:
        """Add `t` and the INHERITS/IMPLEMENTS edges to its direct supertypes."""
        self.add_type(t)
        if t.superclass is not None:
            if t.superclass.canonical_name not in self.g:
                self.add_type(t.superclass)
            self.add_edge(t.canonical_name, t.superclass.canonical_name, "INHERITS")
        for iface in t.interfaces:
            if iface.canonical_name not in self.g:
                self.add_type(iface)
            self.add_edge(t.canonical_name, iface.canonical_name, "IMPLEMENTS")

    def check_acyclic(self) -> None:
        """
        Cyclic inheritance would make every ancestor walk endless, so it is
        rejected at load time.
        """
        try:
            cycle = nx.find_cycle(self.g)
        except nx.NetworkXNoCycle:
            return
        names = " -> ".join(src for src, _dst, *_ in cycle)
        raise ValueError(f"Cyclic inheritance: {names}")

    def supertypes(self, canonical_name: str) -> List[str]:
        """Every type reachable through INHERITS/IMPLEMENTS edges."""
        return sorted(nx.descendants(self.g, canonical_name))

    def to_debug_json(self) -> Dict[str, Any]:
        """
        Convert graph to JSON-like dict for debugging / API responses.
        """
        nodes = []
        for node_id, data in self.g.nodes(data=True):
            t: TypeDescriptor = data["payload"]
            nodes.append({
                "id": node_id,
                "kind": data.get("kind"),
                "attrs": {
                    "name": t.name,
                    "package": t.package,
                    "modifiers": list(t.modifiers),
                    "constructors": len(t.constructors),
                    "methods": [m.name for m in t.methods],
                    "origin": t.origin,
                    "opaque": t.opaque,
                },
            })

        edges = []
        for src, dst, data in self.g.edges(data=True):
            edges.append({
                "src": src,
                "dst": dst,
                "type": data.get("etype"),
            })

        return {"nodes": nodes, "edges": edges}
