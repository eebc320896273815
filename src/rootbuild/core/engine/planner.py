# src/rootbuild/core/engine/planner.py
"""
Planejador da fase de avaliação de projetos.

Este módulo transforma as dependências de avaliação declaradas (arestas
explícitas `dependente → alvo`) em uma ordem linear e determinística de
avaliação dos projetos do build.

A ordem de declaração nunca é usada como critério: somente as arestas
explícitas e o desempate lexicográfico pelo caminho do projeto.

Decisões arquiteturais:
    - Utiliza ordenação topológica determinística (Kahn modificado)
    - Empates são resolvidos por ordem lexicográfica do caminho (`:` primeiro)
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - Nenhum projeto é avaliado antes das suas dependências
    - Todos os projetos aparecem exatamente uma vez
    - A mesma entrada produz sempre a mesma ordem

Limites explícitos:
    - Não avalia projetos
    - Não interage com o descriptor ou o SessionContext
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple


class UnknownProjectError(ValueError):
    """
    Exceção levantada quando uma aresta referencia um projeto inexistente.

    Limites explícitos:
        - Não tenta inferir ou criar projetos ausentes
    """


class CycleDetectedError(ValueError):
    """
    Exceção levantada quando as dependências de avaliação formam um ciclo.

    Nenhuma ordem parcial é produzida nesta condição.
    """


Edge = Tuple[str, str]


def plan_evaluation(projects: Iterable[str], edges: Iterable[Edge]) -> List[str]:
    """
    Valida e produz a ordem de avaliação topológica dos projetos.

    Args:
        projects (Iterable[str]): Caminhos dos projetos do build.
        edges (Iterable[Tuple[str, str]]): Pares `(dependente, dependência)`;
            a dependência é avaliada antes do dependente. Arestas repetidas
            são ignoradas; auto-arestas são rejeitadas como ciclo.

    Returns:
        List[str]: Caminhos em ordem determinística de avaliação.

    Raises:
        ValueError: Se algum caminho for inválido ou duplicado.
        UnknownProjectError: Se uma aresta referenciar projeto inexistente.
        CycleDetectedError: Se houver ciclo no grafo.
    """
    ids: List[str] = []
    known: Set[str] = set()
    for p in projects:
        if not isinstance(p, str) or not p.strip():
            raise ValueError("project path must be a non-empty string")
        if p in known:
            raise ValueError(f"Duplicate project path: {p}")
        known.add(p)
        ids.append(p)

    deps: Dict[str, Set[str]] = {p: set() for p in ids}
    for dependent, dependency in edges:
        for p in (dependent, dependency):
            if p not in known:
                raise UnknownProjectError(
                    f"Evaluation dependency '{dependent}' -> '{dependency}' references unknown project '{p}'"
                )
        deps[dependent].add(dependency)

    # Kahn's algorithm (deterministic)
    incoming_count: Dict[str, int] = {p: len(d) for p, d in deps.items()}
    outgoing: Dict[str, Set[str]] = {p: set() for p in ids}
    for p, dset in deps.items():
        for dep in dset:
            outgoing[dep].add(p)

    ready: List[str] = sorted(p for p, c in incoming_count.items() if c == 0)
    order: List[str] = []

    while ready:
        p = ready.pop(0)
        order.append(p)
        for child in sorted(outgoing[p]):
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                ready.append(child)
                ready.sort()

    if len(order) != len(ids):
        raise CycleDetectedError("Cycle detected in project evaluation graph")

    return order
