"""Modelos del dominio climático.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, XML ni CLI: solo registros anuales y consultas.
"""
