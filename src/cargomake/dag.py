# dag.py
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Set, Tuple

from .model import Target


class TargetError(ValueError):
    """The target table is inconsistent (missing prerequisite, cycle)."""


def build_dag(targets: Dict[str, Target]) -> Tuple[Dict[str, Set[str]], Dict[str, int]]:
    """
    Build a DAG from the target table.

    Edge need -> target.name (need must run BEFORE target).
    """
    names = set(targets)
    adj: Dict[str, Set[str]] = {n: set() for n in names}
    indeg: Dict[str, int] = {n: 0 for n in names}

    for target in targets.values():
        for need in target.needs:
            if need not in names:
                raise TargetError(
                    f"Target '{target.name}' needs missing target '{need}'. "
                    f"Known targets: {sorted(names)}"
                )
            if target.name not in adj[need]:
                adj[need].add(target.name)
                indeg[target.name] += 1

    return adj, indeg


def validate(targets: Dict[str, Target]) -> None:
    """
    Check that every prerequisite exists and that chains are acyclic.
    Raises TargetError otherwise.
    """
    for key, target in targets.items():
        if key != target.name:
            raise TargetError(f"Target registered as '{key}' is named '{target.name}'")

    adj, indeg = build_dag(targets)
    indeg = dict(indeg)
    q = deque(sorted(n for n, d in indeg.items() if d == 0))
    processed = 0

    while q:
        node = q.popleft()
        processed += 1
        for child in sorted(adj[node]):
            indeg[child] -= 1
            if indeg[child] == 0:
                q.append(child)

    if processed != len(indeg):
        stuck = sorted(n for n, d in indeg.items() if d > 0)
        raise TargetError(f"Target graph has a cycle. Stuck targets: {stuck}")


def resolve(
    targets: Dict[str, Target],
    goal: str,
    *,
    seen: Set[str] | None = None,
) -> List[str]:
    """
    Expand `goal` into the ordered list of non-chain targets to execute.

    Chains expand depth-first in declared order. A target already in `seen`
    is not scheduled again, so each target runs at most once per invocation.
    """
    if goal not in targets:
        raise TargetError(f"Unknown target '{goal}'")

    seen = set() if seen is None else seen
    plan: List[str] = []
    visiting: List[str] = []

    def visit(name: str) -> None:
        if name in visiting:
            cycle = " -> ".join(visiting[visiting.index(name):] + [name])
            raise TargetError(f"Target graph has a cycle: {cycle}")
        if name in seen:
            return

        target = targets[name]
        if target.is_chain:
            visiting.append(name)
            for need in target.needs:
                if need not in targets:
                    raise TargetError(f"Target '{name}' needs missing target '{need}'")
                visit(need)
            visiting.pop()
        else:
            plan.append(name)
        seen.add(name)

    visit(goal)
    return plan


def resolve_goals(
    targets: Dict[str, Target],
    goals: Iterable[str],
    default: str = "help",
    fallback: str = "help",
) -> List[str]:
    """
    Resolve the goals given on the command line into one plan.

    - no goals -> `default`
    - an unknown goal -> `fallback` (prints usage)
    - goals are resolved left to right and de-duplicated
    """
    goals = list(goals) or [default]
    seen: Set[str] = set()
    plan: List[str] = []

    for goal in goals:
        name = goal if goal in targets else fallback
        plan.extend(resolve(targets, name, seen=seen))

    return plan
