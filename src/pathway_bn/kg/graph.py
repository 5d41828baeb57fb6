"""
# ==============================================================================
# Module: pathway_bn/kg/graph.py
# ==============================================================================
# Purpose: Pathway node/edge registry - entity resolution, node deduplication,
#          dogma expansion and interaction edges
#
# Dependencies:
#   - External: networkx
#   - Internal: pathway_bn.core.types (Node, Var, constants)
#              pathway_bn.kg.interactions (InteractionMap)
#              pathway_bn.kg.dogma (CentralDogmaTemplate)
#
# Input:
#   - Pathway lines: 2 fields (type, entity) or 3 fields (from, to, label)
#   - InteractionMap and CentralDogmaTemplate
#
# Output:
#   - Nodes with stable insertion-order ids
#   - Parent adjacency: child -> {parent: edge label}
#   - Export: NetworkX DiGraph, statistics
# ==============================================================================
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import networkx as nx

from pathway_bn.core.types import (
    ACTIVE_SUBTYPE,
    DEFAULT_ENTITY_TYPE,
    MULTI_STAGE_TYPE,
    OBSERVATION_INTERACTION,
    VARIABLE_DIMENSION,
    Node,
    Var,
)
from pathway_bn.kg.dogma import CentralDogmaTemplate
from pathway_bn.kg.interactions import InteractionMap
from pathway_bn.kg.readers import LineSource, iter_records, open_lines

logger = logging.getLogger(__name__)


# ==============================================================================
# Pathway Graph
# ==============================================================================
class PathwayGraph:
    """
    Pathway graph

    Owns every node of the network and the parent relation between them.

    - Node ids are assigned 0, 1, 2, ... in first-insertion order and never
      change.
    - Every registered node has an entry in the parent relation, possibly
      empty.
    - An edge from a node to itself is never stored.
    """

    def __init__(
        self,
        interaction_map: Optional[InteractionMap] = None,
        dogma: Optional[CentralDogmaTemplate] = None,
    ):
        """
        Args:
            interaction_map: Interaction label table (default: built-in map)
            dogma: Expression template for multi-stage entities
                (default: built-in template)
        """
        self._imap = interaction_map if interaction_map is not None else InteractionMap.default()
        self._dogma = dogma if dogma is not None else CentralDogmaTemplate.default()

        # {Node: id}
        self._node_index: Dict[Node, int] = {}
        # id -> Node
        self._node_order: List[Node] = []
        # {child: {parent: edge label}}
        self._parents: Dict[Node, Dict[Node, str]] = {}
        # {entity name: entity type}
        self._entity_types: Dict[str, str] = {}

    # ==========================================================================
    # Construction from text
    # ==========================================================================
    @classmethod
    def from_streams(
        cls,
        pathway: LineSource,
        interaction_map: Optional[LineSource] = None,
        dogma: Optional[LineSource] = None,
        source: str = "pathway",
    ) -> "PathwayGraph":
        """
        Build a graph from the three text inputs

        All entity declarations are applied before any interaction, so an
        interaction may name an entity declared further down.

        Args:
            pathway: Pathway lines
            interaction_map: Interaction map lines (None = built-in)
            dogma: Central dogma lines (None = built-in)
            source: Name of the pathway input for error messages
        """
        imap = (
            InteractionMap.from_lines(interaction_map)
            if interaction_map is not None
            else InteractionMap.default()
        )
        template = (
            CentralDogmaTemplate.from_lines(dogma)
            if dogma is not None
            else CentralDogmaTemplate.default()
        )
        graph = cls(interaction_map=imap, dogma=template)
        graph.load_pathway(pathway, source=source)
        return graph

    @classmethod
    def from_files(
        cls,
        pathway_path: Union[str, Path],
        interaction_map_path: Optional[Union[str, Path]] = None,
        dogma_path: Optional[Union[str, Path]] = None,
    ) -> "PathwayGraph":
        """Build a graph from files on disk"""
        pathway_path = Path(pathway_path)
        if not pathway_path.exists():
            raise FileNotFoundError(f"Pathway file not found: {pathway_path}")

        imap = (
            InteractionMap.from_file(interaction_map_path)
            if interaction_map_path is not None
            else InteractionMap.default()
        )
        template = (
            CentralDogmaTemplate.from_file(dogma_path)
            if dogma_path is not None
            else CentralDogmaTemplate.default()
        )
        graph = cls(interaction_map=imap, dogma=template)
        graph.load_pathway(pathway_path, source=str(pathway_path))
        return graph

    def load_pathway(self, lines: LineSource, source: str = "pathway") -> None:
        """
        Apply pathway lines to this graph

        Every line is read and checked before the graph is touched.
        """
        entity_lines: List[List[str]] = []
        interaction_lines: List[List[str]] = []
        for _, fields in iter_records(open_lines(lines), expected=(2, 3), source=source):
            if len(fields) == 2:
                entity_lines.append(fields)
            else:
                interaction_lines.append(fields)

        for entity_type, entity in entity_lines:
            self.add_entity(entity, entity_type)
        for entity_from, entity_to, label in interaction_lines:
            self.add_interaction(entity_from, entity_to, label)

        logger.info(
            f"Pathway loaded from {source}: {len(entity_lines)} entities declared, "
            f"{len(interaction_lines)} interactions, {self.total_nodes} nodes, "
            f"{self.total_edges} edges"
        )

    # ==========================================================================
    # Properties
    # ==========================================================================
    @property
    def interaction_map(self) -> InteractionMap:
        return self._imap

    @property
    def dogma(self) -> CentralDogmaTemplate:
        return self._dogma

    @property
    def node_index(self) -> Mapping[Node, int]:
        """Read-only {Node: id}"""
        return MappingProxyType(self._node_index)

    @property
    def node_order(self) -> Tuple[Node, ...]:
        """Nodes by id"""
        return tuple(self._node_order)

    @property
    def parents_of(self) -> Mapping[Node, Dict[Node, str]]:
        """Read-only {child: {parent: edge label}}"""
        return MappingProxyType(self._parents)

    @property
    def entity_types(self) -> Mapping[str, str]:
        """Read-only {entity name: entity type}"""
        return MappingProxyType(self._entity_types)

    @property
    def total_nodes(self) -> int:
        return len(self._node_order)

    @property
    def total_edges(self) -> int:
        return sum(len(pmap) for pmap in self._parents.values())

    # ==========================================================================
    # Entity Operations
    # ==========================================================================
    def add_entity(self, entity: str, entity_type: str = DEFAULT_ENTITY_TYPE) -> bool:
        """
        Register an entity

        Multi-stage entities are expanded through the central dogma template,
        any other entity gets a single active node. The type given at the
        first registration is kept.

        Returns:
            True if the entity was new
        """
        if entity in self._entity_types:
            return False

        self._entity_types[entity] = entity_type
        if entity_type == MULTI_STAGE_TYPE:
            self._dogma.expand(entity, self)
        else:
            self.add_node(Node(entity, ACTIVE_SUBTYPE))
        return True

    def resolve_entity_node(self, entity: str, subtype: str) -> Node:
        """
        Node that represents an entity at the requested subtype

        Single-stage entities only have their active node, whatever subtype
        is asked for.
        """
        if self._entity_types.get(entity) == MULTI_STAGE_TYPE:
            return Node(entity, subtype)
        return Node(entity, ACTIVE_SUBTYPE)

    def add_interaction(self, entity_from: str, entity_to: str, label: str) -> bool:
        """
        Add an interaction between two entities

        Unknown entities are registered with the default type. When both
        ends resolve to the same node nothing is added.

        Returns:
            True if an edge was stored

        Raises:
            UnknownInteractionError: if label is not in the interaction map;
                the graph is left unchanged
        """
        record = self._imap.get(label)

        self.add_entity(entity_from)
        self.add_entity(entity_to)

        node_from = self.resolve_entity_node(entity_from, record.from_subtype)
        node_to = self.resolve_entity_node(entity_to, record.to_subtype)
        if node_from == node_to:
            logger.debug(f"Dropping self interaction {entity_from} {label} {entity_to}")
            return False

        return self.add_edge(node_from, node_to, record.polarity.value)

    def add_observation_node(
        self,
        entity: str,
        on_subtype: str,
        obs_subtype: str,
    ) -> Var:
        """
        Attach an observed node to one of an entity's hidden nodes

        Args:
            entity: Entity name
            on_subtype: Subtype of the hidden node being observed
            obs_subtype: Subtype label of the new observed node

        Returns:
            Var of the observed node (its id and dimension)
        """
        self.add_entity(entity)

        obs_node = Node(entity, obs_subtype)
        self.add_node(obs_node)
        hidden_node = self.resolve_entity_node(entity, on_subtype)
        self.add_edge(hidden_node, obs_node, OBSERVATION_INTERACTION)

        return Var(self._node_index[obs_node], VARIABLE_DIMENSION)

    # ==========================================================================
    # Node / Edge Operations
    # ==========================================================================
    def add_node(self, node: Node) -> int:
        """
        Register a node

        Returns:
            The node's id (the existing one if already registered)
        """
        node_id = self._node_index.get(node)
        if node_id is not None:
            return node_id

        node_id = len(self._node_order)
        self._node_index[node] = node_id
        self._node_order.append(node)
        self._parents[node] = {}
        return node_id

    def add_edge(self, node_from: Node, node_to: Node, label: str) -> bool:
        """
        Store node_from as a parent of node_to

        Missing endpoints are registered, source first, even when the edge
        itself is a dropped self-loop. Adding the same parent again replaces
        the label.

        Returns:
            False if the edge would be a self-loop (no edge stored)
        """
        self.add_node(node_from)
        self.add_node(node_to)
        if node_from == node_to:
            logger.debug(f"Skipping self-loop on {node_from}")
            return False

        self._parents[node_to][node_from] = label
        logger.debug(f"Edge {node_from} -> {node_to} [{label}]")
        return True

    def has_node(self, node: Node) -> bool:
        return node in self._node_index

    def get_node_id(self, node: Node) -> int:
        """Id of a registered node (KeyError if unknown)"""
        return self._node_index[node]

    def get_node(self, node_id: int) -> Node:
        return self._node_order[node_id]

    def get_var(self, node: Node) -> Var:
        return Var(self._node_index[node], VARIABLE_DIMENSION)

    def get_entity_type(self, entity: str) -> Optional[str]:
        return self._entity_types.get(entity)

    def get_parents(self, node: Node) -> List[Tuple[Node, str]]:
        """(parent, edge label) pairs of a node, parents in Node order"""
        pmap = self._parents.get(node, {})
        return [(parent, pmap[parent]) for parent in sorted(pmap)]

    def children_with_parents(self) -> List[Node]:
        """Nodes with at least one incoming edge, in Node order"""
        return sorted(node for node, pmap in self._parents.items() if pmap)

    def output_node_map(self) -> Dict[int, str]:
        """{id: entity name} for every active node"""
        return {
            node_id: node.entity
            for node_id, node in enumerate(self._node_order)
            if node.subtype == ACTIVE_SUBTYPE
        }

    # ==========================================================================
    # Export Methods
    # ==========================================================================
    def to_networkx(self) -> nx.DiGraph:
        """
        Export to NetworkX DiGraph

        Returns:
            Graph keyed by node id with entity/subtype node attributes and a
            label attribute on every edge
        """
        G = nx.DiGraph()

        for node_id, node in enumerate(self._node_order):
            G.add_node(
                node_id,
                entity=node.entity,
                subtype=node.subtype,
                entity_type=self._entity_types.get(node.entity, DEFAULT_ENTITY_TYPE),
            )

        for child, pmap in self._parents.items():
            child_id = self._node_index[child]
            for parent, label in pmap.items():
                G.add_edge(self._node_index[parent], child_id, label=label)

        return G

    # ==========================================================================
    # Statistics
    # ==========================================================================
    def get_statistics(self) -> Dict[str, Any]:
        """Get graph statistics"""
        entities_by_type: Dict[str, int] = {}
        for entity_type in self._entity_types.values():
            entities_by_type[entity_type] = entities_by_type.get(entity_type, 0) + 1

        edges_by_label: Dict[str, int] = {}
        for pmap in self._parents.values():
            for label in pmap.values():
                edges_by_label[label] = edges_by_label.get(label, 0) + 1

        return {
            "total_entities": len(self._entity_types),
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "nodes_with_parents": len(self.children_with_parents()),
            "entities_by_type": entities_by_type,
            "edges_by_label": edges_by_label,
        }

    def __repr__(self) -> str:
        return f"PathwayGraph(nodes={self.total_nodes}, edges={self.total_edges})"
