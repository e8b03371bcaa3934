# src/confdoc/core/scrub/__init__.py
"""
Scrubber de artefatos: produz a visão segura para renderização de uma ConfigTree.
"""

from .scrubber import find_artifacts, iter_placeholders, scrub

__all__ = ["find_artifacts", "iter_placeholders", "scrub"]
