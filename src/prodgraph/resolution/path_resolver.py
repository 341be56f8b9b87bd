"""
Simple path resolution between a node and a production value.

The search runs backward: it picks the one production value matching the
pattern, then repeatedly looks for the one unvisited rule producing the
current value until it reaches the label of the starting node. Any step with
zero or several candidates fails instead of guessing, so a path is only ever
returned when it is the unique simple path.

The chain is fully determined before the graph is touched; a failed search
leaves the graph unchanged.
"""

import logging
from dataclasses import dataclass, field

from prodgraph.core.types import NodeId
from prodgraph.exceptions import (
    AmbiguousOrMissingSeedError,
    AmbiguousOrMultiplePathsError,
    NoPathError,
    TrivialTargetError,
    UnknownNodeError,
)
from prodgraph.grammar.index import RuleIndex, normalize_alternative
from prodgraph.matching import matches
from prodgraph.structure.expansion import expand, placeholders
from prodgraph.structure.graph import DerivationGraph

logger = logging.getLogger(__name__)


@dataclass
class ResolvedChain:
    """
    Production chain found by the backward walk.

    Params:
        seed: Normalized value matched by the pattern
        alternative: Alternative text expanded for the seed
        chain: Values in discovery order, seed first, ending at the start label
    """

    seed: str
    alternative: str
    chain: list[str]

    @property
    def intermediates(self) -> list[str]:
        """Non-terminals strictly between the start label and the seed, top first."""
        return list(reversed(self.chain[1:-1]))


@dataclass
class PathResult:
    """
    Nodes created by a successful simple path resolution.

    Params:
        source_id: Node the path starts from
        resolved: The chain that was materialized
        intermediate_ids: Created chain nodes, top first
        expanded_ids: Children created for the seed alternative, in token order
        incomplete_ids: Placeholders among expanded_ids
    """

    source_id: NodeId
    resolved: ResolvedChain
    intermediate_ids: list[NodeId] = field(default_factory=list)
    expanded_ids: list[NodeId] = field(default_factory=list)
    incomplete_ids: list[NodeId] = field(default_factory=list)

    @property
    def attach_id(self) -> NodeId:
        """Node under which the seed alternative was expanded."""
        return self.intermediate_ids[-1] if self.intermediate_ids else self.source_id


def normalize_pattern(pattern: str) -> str:
    """
    Reduce a pattern to the form of normalized values.

    Quoting is kept; the quoted text or the bare pattern loses its whitespace
    the same way alternatives do, so "y z" can match the value "yz".
    """
    for quote in ("'", '"'):
        if len(pattern) >= 2 and pattern.startswith(quote) and pattern.endswith(quote):
            return f"{quote}{normalize_alternative(pattern[1:-1])}{quote}"
    return "".join(pattern.split())


def find_chain(index: RuleIndex, target: str, pattern: str) -> ResolvedChain:
    """
    Walk the reverse index from the pattern back to a target label.

    Params:
        index: Rule lookups built from the current grammar
        target: Label of the starting node
        pattern: Search pattern, see prodgraph.matching

    Returns:
        The unique chain connecting target to the matched value

    Raises:
        AmbiguousOrMissingSeedError: If the pattern matches zero or several values
        NoPathError: If a value on the way back has no producing rule
        AmbiguousOrMultiplePathsError: If a step has zero or several unvisited producers
    """
    key = normalize_pattern(pattern)
    seeds = [value for value in index.values() if matches(key, value)]
    if len(seeds) != 1:
        raise AmbiguousOrMissingSeedError(pattern, seeds)

    seed = seeds[0]
    chain = [seed]
    visited: set[str] = set()
    value = seed
    while value != target:
        producers = index.producers(value)
        if not producers:
            raise NoPathError(value)

        candidates = sorted(producers - visited)
        if len(candidates) != 1:
            raise AmbiguousOrMultiplePathsError(value, candidates)

        value = candidates[0]
        visited.add(value)
        chain.append(value)

    return ResolvedChain(seed=seed, alternative=index.spelling(seed), chain=chain)


def simple_path(
    graph: DerivationGraph, index: RuleIndex, source_id: NodeId, pattern: str
) -> PathResult:
    """
    Find the unique simple path from a node to a value and add it to the graph.

    One node is created for every non-terminal between the source label and
    the matched value, each the child of the previous one, and the matched
    alternative is expanded under the last of them (or under the source when
    the value is produced directly).

    Params:
        graph: Graph to extend
        index: Rule lookups rebuilt from the current grammar
        source_id: Node to start from
        pattern: Search pattern for the value to reach

    Returns:
        PathResult describing the created nodes

    Raises:
        UnknownNodeError: If the source node does not exist
        TrivialTargetError: If the pattern or the matched value is the source label
        AmbiguousOrMissingSeedError: If the pattern matches zero or several values
        NoPathError: If no rule leads back to the source label
        AmbiguousOrMultiplePathsError: If any step back is not unique
    """
    target = graph.get_label(source_id)
    if target is None:
        raise UnknownNodeError(source_id, "find a path from")
    if pattern == target:
        raise TrivialTargetError(source_id, target)

    resolved = find_chain(index, target, pattern)
    if len(resolved.chain) == 1:
        raise TrivialTargetError(source_id, target)
    logger.debug("Path from node %d: %s", source_id, " <- ".join(resolved.chain))

    result = PathResult(source_id=source_id, resolved=resolved)
    parent_id = source_id
    for label in resolved.intermediates:
        node_id = graph.new_node(label)
        graph.add_link(parent_id, node_id)
        result.intermediate_ids.append(node_id)
        parent_id = node_id

    result.expanded_ids = expand(graph, resolved.alternative, parent_id)
    result.incomplete_ids = placeholders(graph, result.expanded_ids)
    return result
