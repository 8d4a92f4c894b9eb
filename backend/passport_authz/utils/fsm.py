"""Directed transition graph for the device lifecycle.

Usage:
    from passport_authz.utils.fsm import TransitionCatalog
    catalog = TransitionCatalog(TRANSITION_RULES)
    rule = catalog.rule_for(DeviceStatus.IN_QC, DeviceStatus.QC_PASSED)
    catalog.shortest_path(DeviceStatus.IN_QC, DeviceStatus.DELIVERED)

Only edges present in the rule list exist: no implicit self-loops, no default
transitions. At most one rule per (from, to) pair.
"""
from __future__ import annotations
from collections import OrderedDict, deque
from typing import Dict, Iterable, List, Optional, Tuple

from passport_authz.constants.enums import DeviceStatus
from passport_authz.types import TransitionRule


class TransitionCatalog:
    def __init__(self, rules: Iterable[TransitionRule]):
        by_pair: Dict[Tuple[DeviceStatus, DeviceStatus], TransitionRule] = {}
        outgoing: Dict[DeviceStatus, List[TransitionRule]] = OrderedDict()
        ordered: List[TransitionRule] = []
        for rule in rules:
            if rule.key in by_pair:
                raise ValueError(f"Duplicate transition rule {rule.from_state.value} -> {rule.to_state.value}")
            by_pair[rule.key] = rule
            outgoing.setdefault(rule.from_state, []).append(rule)
            ordered.append(rule)
        self._by_pair = by_pair
        self._outgoing = {state: tuple(edges) for state, edges in outgoing.items()}
        self._rules = tuple(ordered)

    def rule_for(self, from_state: DeviceStatus, to_state: DeviceStatus) -> Optional[TransitionRule]:
        return self._by_pair.get((from_state, to_state))

    def rules_from(self, state: DeviceStatus) -> Tuple[TransitionRule, ...]:
        return self._outgoing.get(state, ())

    def rules(self) -> Tuple[TransitionRule, ...]:
        return self._rules

    def states(self) -> List[DeviceStatus]:
        seen: List[DeviceStatus] = []
        for rule in self._rules:
            for s in (rule.from_state, rule.to_state):
                if s not in seen:
                    seen.append(s)
        return seen

    def shortest_path(self, start: DeviceStatus, end: DeviceStatus) -> List[DeviceStatus]:
        """Breadth-first search; returns [] when ``end`` is unreachable from ``start``."""
        queue = deque([[start]])
        visited = {start}
        while queue:
            path = queue.popleft()
            current = path[-1]
            if current == end:
                return path
            for rule in self.rules_from(current):
                if rule.to_state not in visited:
                    visited.add(rule.to_state)
                    queue.append(path + [rule.to_state])
        return []

    def __len__(self) -> int:
        return len(self._rules)


def build_transition_catalog(rules: Optional[Iterable[TransitionRule]] = None) -> TransitionCatalog:
    if rules is None:
        from passport_authz.constants.transitions import TRANSITION_RULES
        rules = TRANSITION_RULES
    return TransitionCatalog(rules)


__all__ = ['TransitionCatalog', 'build_transition_catalog']
