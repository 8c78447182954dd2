# src/cwagent_translator/core/__init__.py
"""
Core do tradutor de configuração.

Componentes principais:
    - config    → carregamento de fragmentos, merge padrão, hashing
    - merge     → regras por seção, árvore de seções, registro por caminho
    - pipeline  → contexto de tradução e modelo tipado de saída
    - engine    → execução sequencial merge → derivação

Princípios fundamentais:
    - Execução síncrona, sem I/O dentro do pipeline
    - Estado global apenas no registro de seções, congelado após a inicialização
    - Conflitos de merge nunca abortam a tradução
"""
