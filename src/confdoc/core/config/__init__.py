# src/confdoc/core/config/__init__.py

"""
Camada de configuração do confdoc.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar e identificar árvores de configuração.

Responsabilidades do pacote:
    - Carregamento de árvores e fragmentos (YAML/JSON)
    - Deep-merge determinístico com política de append para listas
    - Hierarquia de exceções de configuração
    - Hash canônico de árvores sanitizadas

Invariantes:
    - Árvores resultantes são dicionários puros (dict)
    - Nenhuma operação muta suas entradas
    - Erros estruturais são tratados como falha fatal

Limites explícitos:
    - Não valida semântica de domínio
    - Não avalia artefatos de build
"""
