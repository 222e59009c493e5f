"""Infrastructure layer — graph engine and package collector.

This layer depends on the domain layer, stdlib, and third-party libs
(NetworkX, pydantic). It must never import from services, commands, or output.
"""
