# src/rootbuild/core/repositories.py
"""
Repositórios de dependências declarados pelo descriptor.

A `RepositoryList` é uma sequência ordenada e imutável: a ordem define a
precedência de lookup durante a resolução de dependências (executada pelo
engine externo, fora do escopo deste pacote).

Entradas aceitas na declaração:
    - nome bem conhecido (`"google"`, `"mavenCentral"`)
    - mapeamento explícito `{"name": ..., "url": ...}`

Invariantes:
    - A ordem declarada é preservada
    - Duplicatas são permitidas (desperdício, nunca erro)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple


@dataclass(frozen=True)
class Repository:
    name: str
    url: str


# Índice público de pacotes e índice central de artefatos.
GOOGLE = Repository(name="google", url="https://dl.google.com/dl/android/maven2/")
MAVEN_CENTRAL = Repository(name="mavenCentral", url="https://repo.maven.apache.org/maven2/")

WELL_KNOWN: dict = {
    GOOGLE.name: GOOGLE,
    MAVEN_CENTRAL.name: MAVEN_CENTRAL,
}

RepositoryList = Tuple[Repository, ...]


def resolve_repository(entry: Any) -> Repository:
    """Converte uma entrada declarativa em `Repository`.

    Raises:
        ValueError: nome desconhecido ou mapeamento sem `name`/`url`.
    """
    if isinstance(entry, Repository):
        return entry

    if isinstance(entry, str):
        repo = WELL_KNOWN.get(entry)
        if repo is None:
            raise ValueError(
                f"Unknown repository '{entry}'. Known: {sorted(WELL_KNOWN)}"
            )
        return repo

    if isinstance(entry, dict):
        name = entry.get("name")
        url = entry.get("url")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("repository.name must be a non-empty string")
        if not isinstance(url, str) or not url.strip():
            raise ValueError(f"repository '{name}' must declare a non-empty url")
        return Repository(name=name, url=url)

    raise ValueError(f"Invalid repository entry: {entry!r}")


def resolve_repositories(entries: Iterable[Any]) -> RepositoryList:
    return tuple(resolve_repository(e) for e in entries)


def duplicates(repos: RepositoryList) -> List[Repository]:
    """Retorna as entradas repetidas, na ordem em que reaparecem."""
    seen = set()
    dups: List[Repository] = []
    for r in repos:
        if r in seen:
            dups.append(r)
        seen.add(r)
    return dups
