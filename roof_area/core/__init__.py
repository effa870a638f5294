"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, source names, payload labels
- exceptions: Exception taxonomy
- ingress: Request parameter parsing at the HTTP boundary
"""
