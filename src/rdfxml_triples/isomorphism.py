"""Blank node independent comparison of triple lists.

Parser output and expected N-Triples usually disagree on blank node labels.
:func:`canonicalize` relabels blank nodes by graph structure alone
(``c0``, ``c1``, ...) and returns the triples sorted, so two lists describe
the same graph exactly when their canonical forms are equal.

The graph is first split into connected components over its blank nodes;
each component is labelled on its own and the components are then ordered
by their labelled form, so repeated identical components cost no search.
Within a component, labels are found by colour refinement: every blank node
is repeatedly hashed together with the predicates and neighbour colours of
the triples it takes part in. Nodes that remain indistinguishable are
individualized one at a time, keeping the lexicographically smallest
result. A candidate is skipped when swapping it with an already explored
one maps the component onto itself, since both branches then give the same
labellings. Duplicate triples are ignored, as in an RDF graph.

Example:
        isomorphic(parse_rdfxml(doc, base_url=base), parse_document(expected_nt))
"""

from __future__ import annotations

import hashlib
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .models import BlankNodeID, Object, Triple


def _term_key(term: Object, colour: Dict[BlankNodeID, str]) -> str:
    if isinstance(term, BlankNodeID):
        return f"_:{colour[term]}"
    return term.to_ntriples()


def _refine(
    graph: Set[Triple], colour: Dict[BlankNodeID, str]
) -> Dict[BlankNodeID, str]:
    distinct = len(set(colour.values()))
    while True:
        signatures: Dict[BlankNodeID, List[Tuple[str, str, str]]] = {b: [] for b in colour}
        for t in graph:
            if isinstance(t.subject, BlankNodeID):
                signatures[t.subject].append(("s", t.predicate.value, _term_key(t.object, colour)))
            if isinstance(t.object, BlankNodeID):
                signatures[t.object].append(("o", t.predicate.value, _term_key(t.subject, colour)))
        refined = {
            b: hashlib.md5(repr((colour[b], sorted(sig))).encode("utf-8")).hexdigest()
            for b, sig in signatures.items()
        }
        count = len(set(refined.values()))
        if count == distinct:
            return refined
        colour, distinct = refined, count


def _swap_is_automorphism(graph: Set[Triple], a: BlankNodeID, b: BlankNodeID) -> bool:
    def swap(term):
        if term == a:
            return b
        if term == b:
            return a
        return term

    return all(
        Triple(swap(t.subject), t.predicate, swap(t.object)) in graph
        for t in graph
        if t.subject in (a, b) or t.object in (a, b)
    )


def _labellings(
    graph: Set[Triple], colour: Dict[BlankNodeID, str]
) -> Iterator[Dict[BlankNodeID, str]]:
    colour = _refine(graph, colour)
    classes: Dict[str, List[BlankNodeID]] = {}
    for node, value in colour.items():
        classes.setdefault(value, []).append(node)
    ambiguous = sorted(value for value, members in classes.items() if len(members) > 1)
    if not ambiguous:
        ordered = sorted(colour, key=colour.get)
        yield {node: f"c{i}" for i, node in enumerate(ordered)}
        return
    explored: List[BlankNodeID] = []
    for node in classes[ambiguous[0]]:
        if any(_swap_is_automorphism(graph, seen, node) for seen in explored):
            continue
        explored.append(node)
        split = dict(colour)
        split[node] = colour[node] + "*"
        yield from _labellings(graph, split)


def _relabel(graph: Iterable[Triple], labels: Dict[BlankNodeID, str]) -> List[Triple]:
    def swap(term):
        if isinstance(term, BlankNodeID):
            return BlankNodeID(labels[term])
        return term

    return sorted(
        (Triple(swap(t.subject), t.predicate, swap(t.object)) for t in graph), key=str
    )


def _blank_nodes(t: Triple) -> List[BlankNodeID]:
    return [term for term in (t.subject, t.object) if isinstance(term, BlankNodeID)]


def _components(graph: Set[Triple]) -> Tuple[List[Triple], List[Set[Triple]]]:
    """Split ``graph`` into ground triples and blank-node-connected components."""
    parent: Dict[BlankNodeID, BlankNodeID] = {}

    def find(node: BlankNodeID) -> BlankNodeID:
        parent.setdefault(node, node)
        while parent[node] != node:
            parent[node] = parent[parent[node]]
            node = parent[node]
        return node

    ground: List[Triple] = []
    for t in graph:
        nodes = _blank_nodes(t)
        if not nodes:
            ground.append(t)
            continue
        roots = [find(n) for n in nodes]
        if len(roots) == 2 and roots[0] != roots[1]:
            parent[roots[1]] = roots[0]

    grouped: Dict[BlankNodeID, Set[Triple]] = {}
    for t in graph:
        nodes = _blank_nodes(t)
        if nodes:
            grouped.setdefault(find(nodes[0]), set()).add(t)
    return ground, list(grouped.values())


def _canonical_component(component: Set[Triple]) -> List[Triple]:
    nodes = {n for t in component for n in _blank_nodes(t)}
    best: List[Triple] = []
    best_key: List[str] = []
    for labels in _labellings(component, {node: "" for node in nodes}):
        candidate = _relabel(component, labels)
        key = [str(t) for t in candidate]
        if not best_key or key < best_key:
            best, best_key = candidate, key
    return best


def canonicalize(triples: Iterable[Triple]) -> List[Triple]:
    """Return the triples with structural blank node labels, sorted by N-Triples text."""
    ground, components = _components(set(triples))
    forms = sorted(
        (_canonical_component(c) for c in components), key=lambda f: [str(t) for t in f]
    )
    result = list(ground)
    offset = 0
    for form in forms:
        local = {n for t in form for n in _blank_nodes(t)}
        labels = {n: f"c{offset + int(n.label[1:])}" for n in local}
        result.extend(_relabel(form, labels))
        offset += len(local)
    return sorted(result, key=str)


def isomorphic(a: Iterable[Triple], b: Iterable[Triple]) -> bool:
    """True when ``a`` and ``b`` are the same graph up to blank node renaming."""
    return canonicalize(a) == canonicalize(b)
