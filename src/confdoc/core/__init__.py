# src/confdoc/core/__init__.py
"""
Core do confdoc.

Este pacote contém a implementação canônica e independente de adapters
do confdoc, reunindo as responsabilidades essenciais para declarar,
compor e sanitizar configuração de documentação.

O core é projetado para ser:
    - determinístico
    - puramente funcional nas operações de árvore (scrub e merge)
    - testável de forma isolada
    - livre de dependências de renderização ou de sistemas de build

Subpacotes:
    - tree          → nós tipados, artefatos e placeholders
    - options       → registro de OptionSpec e opções de documentação
    - scrub         → scrubber de artefatos
    - config        → merge, loader, erros e hashing
    - compose       → composer de fragmentos condicionais
    - documentation → fragmentos do módulo de documentação
    - assembly      → adapter de montagem da documentação

Limites explícitos:
    - Não renderiza HTML, man pages ou qualquer formato de saída
    - Não instala arquivos
    - Não avalia artefatos de build
"""
