"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para transporte HTTP y validación.
- El cliente depende de estas abstracciones; los tests inyectan fakes.
"""
