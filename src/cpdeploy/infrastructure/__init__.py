"""Infrastructure layer — control-plane CLI, filesystem, network.

This layer depends on stdlib and third-party libs (requests, dnspython,
Jinja2).  It may use pure helpers from the domain layer but must never
import from services, commands, or output.
"""
