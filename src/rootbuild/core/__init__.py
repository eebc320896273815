"""
Core do rootbuild.

Este pacote reúne a implementação canônica do descriptor raiz e do engine
mínimo que o hospeda.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada (nenhum estado global)
    - livre de dependências de CLI

Limites explícitos:
    - Não contém lógica específica de plataforma
    - Não executa compilação ou empacotamento
"""
