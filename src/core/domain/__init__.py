"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) de una consulta WHOIS.
- El dominio no conoce subprocess, CLI ni terminal: solo conceptos del problema.
"""
