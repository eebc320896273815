"""
Sessão do build: contexto explícito e isolado por invocação do engine.
"""

from .context import SessionContext

__all__ = ["SessionContext"]
